"""
Constantes e configuração centralizadas para o backend Arremate Certo.

Todos os demais módulos devem importar daqui, nunca definir constantes
localmente para evitar divergências.  Valores sensíveis ao ambiente são lidos
de variáveis de ambiente (com ``.env`` carregado via python-dotenv).
"""

import os

from dotenv import load_dotenv

load_dotenv()

# ===========================================================================
# Fonte de dados — Caixa Econômica Federal
# ===========================================================================

#: Template da URL do CSV de imóveis por UF (``{uf}`` sempre em maiúsculas)
CSV_URL_TEMPLATE: str = (
    "https://venda-imoveis.caixa.gov.br/listaweb/Lista_imoveis_{uf}.csv"
)

#: Encoding dos CSVs publicados pela Caixa
CSV_ENCODING: str = "latin-1"

#: Separador de colunas dos CSVs da Caixa
CSV_SEPARADOR: str = ";"

#: Timeout (segundos) do download do CSV
TIMEOUT_DOWNLOAD: float = 20.0

#: Headers HTTP enviados ao site da Caixa
HEADERS: dict[str, str] = {
    "User-Agent": "ArremateCerto/1.0 (backend de consulta de imoveis)",
    "Accept-Language": "pt-BR,pt;q=0.9",
}

# ===========================================================================
# Cache por UF
# ===========================================================================

#: Janela de validade do cache em memória (10 minutos)
CACHE_TTL_SEGUNDOS: float = float(os.environ.get("CACHE_TTL_SEGUNDOS", "600"))

# ===========================================================================
# Análise com IA (API compatível com OpenAI)
# ===========================================================================

#: Endpoint de chat completions
LLM_API_URL: str = os.environ.get(
    "LLM_API_URL", "https://api.openai.com/v1/chat/completions"
)

#: Modelo usado na análise de viabilidade
LLM_MODEL: str = os.environ.get("LLM_MODEL", "gpt-4.1-mini")

#: Variável de ambiente com a API key
LLM_API_KEY_ENV: str = "OPENAI_API_KEY"

#: Timeout (segundos) da chamada de análise
TIMEOUT_LLM: float = 60.0

# ===========================================================================
# Servidor HTTP e logging
# ===========================================================================

HOST: str = os.environ.get("HOST", "0.0.0.0")
PORT: int = int(os.environ.get("PORT", "4000"))
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

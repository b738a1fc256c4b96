"""arremate/analise_llm.py — Análise de viabilidade de arremate via LLM.

Recebe um imóvel no formato devolvido por ``GET /api/imoveis``, monta o
prompt, chama a API de chat completions (compatível com OpenAI) em modo JSON
e devolve o objeto parseado sem alterações:

  {
    "score": 72,
    "resumo": "...",
    "pontos_positivos": ["..."],
    "pontos_atencao": ["..."],
    "estrategia": "..."
  }

Não há validação de schema nem retry: qualquer falha vira
:class:`~arremate.erros.AdvisoryError`.
"""

# ============================================================================
# Imports
# ============================================================================
import json
import logging
import os
from typing import Any, Mapping

import requests

from arremate.config import LLM_API_KEY_ENV, LLM_API_URL, LLM_MODEL, TIMEOUT_LLM
from arremate.erros import AdvisoryError

# ============================================================================
# Constants
# ============================================================================
log = logging.getLogger(__name__)

_PROMPT_TEMPLATE = """
Você é um analista especializado em imóveis de leilão da Caixa.

Avalie o imóvel abaixo quanto à viabilidade de arremate. Use somente os dados
fornecidos; não invente informações.

Dados:
- UF: {uf}
- Cidade: {cidade}
- Bairro: {bairro}
- Tipo: {tipo}
- Modalidade: {modalidade}
- Valor: R$ {valor}
- Área: {area} m²
- Situação: {situacao}

Responda em JSON com os campos:
- "score": número de 0 a 100 (quanto maior, mais atrativo o arremate)
- "resumo": texto curto (2 ou 3 frases) descrevendo o perfil do imóvel
- "pontos_positivos": array de textos curtos
- "pontos_atencao": array de textos curtos
- "estrategia": recomendação prática para o investidor

Considere apenas critérios genéricos: tipo, modalidade, valor relativo (mesmo
sem média de mercado), ocupação/situação e localização.
"""

_CAMPOS_PROMPT: tuple[str, ...] = (
    "uf",
    "cidade",
    "bairro",
    "tipo",
    "modalidade",
    "valor",
    "area",
    "situacao",
)

# ============================================================================
# Core helpers
# ============================================================================


def _api_key(api_key: str | None = None) -> str:
    """Obtém a API key (parâmetro ou variável de ambiente)."""
    key = api_key or os.environ.get(LLM_API_KEY_ENV, "")
    if not key:
        raise AdvisoryError(
            f"API key do LLM não fornecida. Use --api-key ou exporte {LLM_API_KEY_ENV}."
        )
    return key


def montar_prompt(imovel: Mapping[str, Any]) -> str:
    """Preenche o template com os campos do imóvel (ausentes viram vazio)."""
    valores = {}
    for campo in _CAMPOS_PROMPT:
        valor = imovel.get(campo)
        valores[campo] = "" if valor is None else valor
    return _PROMPT_TEMPLATE.format(**valores)


def _extrair_json(conteudo: str) -> Any:
    """Parseia o texto da resposta, removendo cerca ```json se houver.

    JSON válido é aceito como veio, mesmo que algum valor contenha crases;
    a cerca só é removida quando o texto começa por ela.
    """
    conteudo = conteudo.strip()
    try:
        return json.loads(conteudo)
    except json.JSONDecodeError:
        if not conteudo.startswith("```"):
            raise

    conteudo = conteudo.split("```")[1]
    if conteudo.startswith("json"):
        conteudo = conteudo[4:]
    return json.loads(conteudo.strip())


# ============================================================================
# Public API
# ============================================================================


def analisar_imovel(
    imovel: Mapping[str, Any],
    api_key: str | None = None,
    modelo: str = LLM_MODEL,
    timeout: float = TIMEOUT_LLM,
) -> Any:
    """Pede ao LLM a análise de viabilidade de um imóvel.

    Args:
        imovel:  Objeto do imóvel (chaves ``uf``, ``cidade``, ``valor``...).
        api_key: API key (fallback: env ``OPENAI_API_KEY``).
        modelo:  Modelo de chat completions.
        timeout: Timeout da chamada em segundos.

    Returns:
        O JSON devolvido pelo modelo, exatamente como parseado.

    Raises:
        AdvisoryError: API key ausente, falha de rede/HTTP, envelope
                       inesperado ou conteúdo que não é JSON.
    """
    key = _api_key(api_key)
    payload = {
        "model": modelo,
        "messages": [{"role": "user", "content": montar_prompt(imovel)}],
        "response_format": {"type": "json_object"},
        "temperature": 0.2,
    }
    headers = {
        "Authorization": f"Bearer {key}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }

    log.info(
        "[IA] Analisando imóvel %s (%s/%s)",
        imovel.get("id", "-"),
        imovel.get("cidade", ""),
        imovel.get("uf", ""),
    )
    try:
        resp = requests.post(LLM_API_URL, json=payload, headers=headers, timeout=timeout)
        resp.raise_for_status()
        conteudo = resp.json()["choices"][0]["message"]["content"]
    except requests.RequestException as exc:
        raise AdvisoryError(f"Falha na chamada ao LLM: {exc}") from exc
    except (ValueError, KeyError, IndexError, TypeError) as exc:
        raise AdvisoryError(f"Envelope de resposta inesperado: {exc}") from exc

    try:
        return _extrair_json(conteudo)
    except (json.JSONDecodeError, AttributeError, IndexError) as exc:
        raise AdvisoryError(f"Resposta do LLM não é JSON válido: {exc}") from exc

"""
Pacote Arremate Certo — backend de imóveis da Caixa com análise por IA.

Módulos disponíveis:

- ``arremate.config``      — constantes e variáveis de ambiente
- ``arremate.erros``       — taxonomia de erros (400/500 na API)
- ``arremate.numeros``     — conversão de números no formato pt-BR
- ``arremate.download``    — download do CSV da Caixa por UF
- ``arremate.normalizacao`` — CSV → registros canônicos (:class:`Imovel`)
- ``arremate.cache``       — cache em memória por UF com validade
- ``arremate.filtros``     — filtros de modalidade e faixa de valor
- ``arremate.analise_llm`` — análise de viabilidade via LLM
- ``arremate.api``         — API HTTP (Flask)
- ``arremate.cli``         — linha de comando
"""

__version__ = "0.1.0"

"""
Conversão de números no formato brasileiro (``R$ 1.234,56``) para float.

A política é nunca lançar exceção: entrada vazia, ausente ou ilegível vira
``0.0``.  Não há autodetecção de locale: o formato brasileiro é assumido
sempre.
"""

import math
import re

# Símbolo de moeda e qualquer espaço
_RE_MOEDA_ESPACO = re.compile(r"[R$\s]")


def parse_numero_br(valor: str | float | int | None) -> float:
    """Converte um número formatado em pt-BR para float.

    Remove espaços e ``R$``, descarta os pontos de milhar e troca a vírgula
    decimal por ponto.

    Examples:
        >>> parse_numero_br("1.234,56")
        1234.56
        >>> parse_numero_br("R$ 900")
        900.0
        >>> parse_numero_br("N/A")
        0.0

    Args:
        valor: Texto (ou número já convertido) vindo do CSV.

    Returns:
        O valor numérico, ou ``0.0`` se *valor* for vazio ou inválido.
    """
    if valor is None or valor == "":
        return 0.0
    if isinstance(valor, (int, float)):
        return float(valor) if math.isfinite(valor) else 0.0

    texto = _RE_MOEDA_ESPACO.sub("", str(valor).strip())
    texto = texto.replace(".", "").replace(",", ".", 1)
    if not texto:
        return 0.0

    try:
        numero = float(texto)
    except ValueError:
        return 0.0

    return numero if math.isfinite(numero) else 0.0

"""
Filtros de consulta sobre a lista de imóveis de uma UF.

Todos os filtros são opcionais e cumulativos; a ordem original é preservada.
"""

import math
from typing import Iterable

from arremate.erros import ValidationError
from arremate.normalizacao import Imovel


def converter_valor(texto: str | None, nome: str) -> float | None:
    """Converte um limite de valor vindo da query string.

    Aceita ``"300000"`` e ``"300000.50"`` (formato de URL, não pt-BR).

    Raises:
        ValidationError: Se *texto* não for numérico (``"nan"`` incluso).
    """
    if texto is None or not str(texto).strip():
        return None
    try:
        valor = float(texto)
    except ValueError:
        valor = math.nan
    # "nan" passa pelo float(), mas não serve como limite
    if math.isnan(valor):
        raise ValidationError(
            f"Parâmetro {nome} deve ser numérico (recebido: {texto!r})"
        )
    return valor


def filtrar_imoveis(
    imoveis: Iterable[Imovel],
    uf: str | None = None,
    modalidade: str | None = None,
    min_valor: float | None = None,
    max_valor: float | None = None,
) -> list[Imovel]:
    """Aplica os filtros informados e devolve uma nova lista.

    Args:
        imoveis:    Imóveis de entrada (não é modificada).
        uf:         Igualdade exata, sem diferenciar maiúsculas.
        modalidade: Substring da modalidade, sem diferenciar maiúsculas
                    (``"leilão"`` casa com ``"Leilão Extrajudicial"``).
        min_valor:  Valor mínimo, inclusivo.
        max_valor:  Valor máximo, inclusivo.

    Returns:
        Subsequência de *imoveis* que satisfaz todos os filtros presentes.
    """
    resultado = list(imoveis)

    if uf:
        alvo_uf = uf.strip().upper()
        resultado = [i for i in resultado if (i.uf or "").upper() == alvo_uf]

    if modalidade:
        alvo = modalidade.casefold()
        resultado = [i for i in resultado if alvo in (i.modalidade or "").casefold()]

    if min_valor is not None:
        resultado = [i for i in resultado if i.valor >= min_valor]

    if max_valor is not None:
        resultado = [i for i in resultado if i.valor <= max_valor]

    return resultado

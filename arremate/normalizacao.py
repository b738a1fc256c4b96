"""
Normalização do CSV da Caixa em registros canônicos de imóvel.

O cabeçalho dos CSVs muda entre publicações (com/sem acento, caixa alta,
abreviações).  Cada campo canônico tem uma lista ordenada de nomes de coluna
aceitos em :data:`CAMPOS_ORIGEM`; vence o primeiro valor não vazio.

Uso standalone::

    python -m arremate.normalizacao lista_sp.csv --uf SP
"""

import io
import logging
import warnings
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from arremate.config import CSV_SEPARADOR
from arremate.erros import ParseError
from arremate.numeros import parse_numero_br

log = logging.getLogger(__name__)

# ===========================================================================
# Registro canônico
# ===========================================================================


@dataclass(slots=True)
class Imovel:
    """Imóvel normalizado, independente da grafia das colunas de origem.

    ``id`` é a posição da linha no CSV e só é única dentro de um mesmo
    download.  ``bruto`` guarda a linha original sem nenhuma alteração.
    """

    id: int
    uf: str
    cidade: str = ""
    bairro: str = ""
    logradouro: str = ""
    modalidade: str = ""
    tipo: str = ""
    situacao: str = ""
    valor: float = 0.0
    area: float = 0.0
    lat: float | None = None
    lng: float | None = None
    bruto: dict[str, str] = field(default_factory=dict)

    def para_dict(self) -> dict[str, Any]:
        """Serializa no formato JSON consumido pelo front-end."""
        return {
            "id": self.id,
            "bruto": dict(self.bruto),
            "uf": self.uf,
            "cidade": self.cidade,
            "bairro": self.bairro,
            "logradouro": self.logradouro,
            "modalidade": self.modalidade,
            "valor": self.valor,
            "area": self.area,
            "tipo": self.tipo,
            "situacao": self.situacao,
            "lat": self.lat,
            "lng": self.lng,
        }


# ===========================================================================
# Tabela de colunas de origem
# ===========================================================================

#: Campo canônico → nomes de coluna aceitos, em ordem de prioridade
CAMPOS_ORIGEM: dict[str, tuple[str, ...]] = {
    "uf": ("UF", "Uf", "uf"),
    "cidade": ("MUNICIPIO", "Município", "Municipio", "CIDADE", "Cidade"),
    "bairro": ("BAIRRO", "Bairro"),
    "logradouro": (
        "ENDERECO",
        "Endereço",
        "Endereco",
        "ENDEREÇO",
        "LOGRADOURO",
        "Logradouro",
    ),
    "modalidade": (
        "MODALIDADE",
        "Modalidade",
        "Modalidade de venda",
        "MODALIDADE DE VENDA",
    ),
    "tipo": ("TIPO_IMOVEL", "Tipo de Imóvel", "Tipo de Imovel", "TIPO", "Tipo"),
    "situacao": ("SITUACAO", "Situação", "Situacao", "SITUAÇÃO"),
    "valor": (
        "VALOR",
        "Valor",
        "Preço",
        "PRECO",
        "Preco",
        "VALOR_AVALIACAO",
        "Valor de avaliação",
    ),
    "area": ("AREA_TOTAL", "Área Total", "Area Total", "AREA", "Área", "Area"),
}

#: Campos convertidos por :func:`~arremate.numeros.parse_numero_br`
CAMPOS_NUMERICOS: tuple[str, ...] = ("valor", "area")


# ===========================================================================
# Parse
# ===========================================================================


def parse_imoveis_csv(texto: str, uf: str) -> list[Imovel]:
    """Converte o texto do CSV em lista de :class:`Imovel`.

    O CSV é lido com todas as células como texto (sem inferência de tipo nem
    conversão para NaN), para que ``bruto`` reflita exatamente a origem.
    Linhas em branco são ignoradas e a ordem das linhas é preservada.

    Args:
        texto: Conteúdo do CSV (separador ``;``, cabeçalho na primeira linha).
        uf:    UF da requisição, usada quando a linha não traz coluna ``UF``.

    Returns:
        Lista de imóveis com ``id`` igual ao índice da linha (base zero).

    Raises:
        ParseError: Se o texto não for um CSV delimitado válido.
    """
    if not texto.strip():
        return []

    linhas = _ler_linhas(texto)
    imoveis = [_normalizar_linha(idx, linha, uf) for idx, linha in enumerate(linhas)]
    log.info("[NORMALIZACAO] %s: %d imóveis", uf.upper(), len(imoveis))
    return imoveis


# ===========================================================================
# Helpers privados
# ===========================================================================


def _ler_linhas(texto: str) -> list[dict[str, str]]:
    """Lê o CSV com pandas e devolve as linhas como dicts ``coluna → texto``.

    Linha com mais campos que o cabeçalho gera ``ParserWarning`` no pandas
    (os campos extras seriam descartados); aqui ela vira erro.
    """
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("error", pd.errors.ParserWarning)
            df = pd.read_csv(
                io.StringIO(texto),
                sep=CSV_SEPARADOR,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                index_col=False,
            )
    except (
        pd.errors.ParserError,
        pd.errors.ParserWarning,
        pd.errors.EmptyDataError,
    ) as e:
        raise ParseError(f"CSV inválido: {e}") from e

    return df.to_dict(orient="records")


def _primeiro_valor(linha: dict[str, str], candidatos: tuple[str, ...]) -> str:
    """Devolve o primeiro valor não vazio entre as colunas *candidatos*."""
    # Cabeçalhos da Caixa às vezes vêm com espaço sobrando (" N° do imóvel")
    por_nome = {str(col).strip(): valor for col, valor in linha.items()}
    for coluna in candidatos:
        valor = por_nome.get(coluna)
        if valor is not None and str(valor).strip():
            return str(valor).strip()
    return ""


def _normalizar_linha(idx: int, linha: dict[str, str], uf: str) -> Imovel:
    campos: dict[str, Any] = {
        nome: _primeiro_valor(linha, candidatos)
        for nome, candidatos in CAMPOS_ORIGEM.items()
    }
    for nome in CAMPOS_NUMERICOS:
        campos[nome] = parse_numero_br(campos[nome])

    campos["uf"] = (campos["uf"] or uf).strip().upper()
    return Imovel(id=idx, bruto=dict(linha), **campos)


# ===========================================================================
# Entrypoint standalone: python -m arremate.normalizacao
# ===========================================================================


if __name__ == "__main__":
    import argparse
    import json
    import sys
    from pathlib import Path

    from arremate.config import CSV_ENCODING

    p = argparse.ArgumentParser(
        prog="python -m arremate.normalizacao",
        description="Normaliza um CSV da Caixa salvo em disco e imprime JSON.",
    )
    p.add_argument("arquivo", type=Path, help="CSV de entrada")
    p.add_argument("--uf", required=True, help="UF dos imóveis do arquivo")
    p.add_argument(
        "--encoding",
        default=CSV_ENCODING,
        help=f"Encoding do arquivo (padrão: {CSV_ENCODING})",
    )
    args = p.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    try:
        resultado = parse_imoveis_csv(
            args.arquivo.read_text(encoding=args.encoding), args.uf
        )
    except (OSError, ParseError) as e:
        log.error("%s", e)
        sys.exit(1)

    print(json.dumps([i.para_dict() for i in resultado], ensure_ascii=False, indent=2))
    sys.exit(0)

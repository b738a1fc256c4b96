"""
Download do CSV de imóveis da Caixa para uma UF.

URL determinística: :data:`~arremate.config.CSV_URL_TEMPLATE` com a UF em
maiúsculas.  Sem retry e sem validação de content-type; qualquer falha vira
:class:`~arremate.erros.FetchError`.

Uso standalone::

    python -m arremate.download SP
    python -m arremate.download rj --saida lista_rj.csv
"""

import logging

import requests

from arremate.config import CSV_ENCODING, CSV_URL_TEMPLATE, HEADERS, TIMEOUT_DOWNLOAD
from arremate.erros import FetchError

log = logging.getLogger(__name__)

# ===========================================================================
# Download
# ===========================================================================


def montar_url(uf: str) -> str:
    """Monta a URL do CSV da Caixa para *uf* (normalizada para maiúsculas)."""
    return CSV_URL_TEMPLATE.format(uf=uf.strip().upper())


def baixar_csv_caixa(uf: str, timeout: float = TIMEOUT_DOWNLOAD) -> str:
    """Baixa o CSV de imóveis de *uf* e devolve o texto decodificado.

    Os CSVs da Caixa são publicados em latin-1; o corpo é lido como bytes e
    decodificado explicitamente para não depender do charset informado pelo
    servidor.

    Args:
        uf:      Código da UF (``"sp"`` ou ``"SP"``).
        timeout: Timeout da requisição em segundos.

    Returns:
        Conteúdo do CSV como ``str``.

    Raises:
        FetchError: Status HTTP de erro (``status`` preenchido) ou falha de
                    transporte (``status=None``).
    """
    url = montar_url(uf)
    log.info("[DOWNLOAD] Baixando: %s", url)

    try:
        resp = requests.get(url, headers=HEADERS, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(f"Falha ao acessar {url}: {e}") from e

    if not resp.ok:
        raise FetchError(
            f"Caixa respondeu status {resp.status_code} para {url}",
            status=resp.status_code,
        )

    texto = resp.content.decode(CSV_ENCODING)
    log.info("[DOWNLOAD] %s: %d bytes", uf.upper(), len(resp.content))
    return texto


# ===========================================================================
# Entrypoint standalone: python -m arremate.download
# ===========================================================================


def _build_arg_parser():  # type: ignore[return]
    import argparse
    from pathlib import Path

    parser = argparse.ArgumentParser(
        prog="python -m arremate.download",
        description="Baixa o CSV de imóveis da Caixa para uma UF.",
    )
    parser.add_argument("uf", metavar="UF", help="Código da UF (ex: SP)")
    parser.add_argument(
        "--saida",
        type=Path,
        default=None,
        metavar="ARQUIVO",
        help="Salva o CSV (em UTF-8) neste arquivo em vez de imprimir o resumo.",
    )
    return parser


if __name__ == "__main__":
    import sys

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    args = _build_arg_parser().parse_args()

    try:
        csv_texto = baixar_csv_caixa(args.uf)
    except FetchError as e:
        log.error("%s", e)
        sys.exit(1)

    if args.saida:
        args.saida.write_text(csv_texto, encoding="utf-8")
        print(f"CSV salvo: {args.saida}")
    else:
        linhas = csv_texto.splitlines()
        print(f"{len(linhas)} linha(s). Cabeçalho: {linhas[0] if linhas else '-'}")

    sys.exit(0)

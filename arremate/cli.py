"""
CLI do backend Arremate Certo.

Subcomandos disponíveis::

    arremate servir   [--host HOST] [--port PORTA]
    arremate listar   --uf UF [--modalidade TEXTO] [--min-valor N] [--max-valor N]
                      [--limite N] [--json]
    arremate analisar ARQUIVO.json [--api-key KEY]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable

from arremate.config import HOST, LOG_LEVEL, PORT
from arremate.erros import ArremateError

log = logging.getLogger(__name__)


# ===========================================================================
# Logging
# ===========================================================================


def _setup_logging(verbose: bool = False) -> None:
    """Configura logging do processo."""
    level = logging.DEBUG if verbose else getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# ===========================================================================
# Subcomando: servir
# ===========================================================================


def cmd_servir(args: argparse.Namespace) -> int:
    """Sobe o servidor HTTP (servidor de desenvolvimento do Flask)."""
    from arremate.api import criar_app

    app = criar_app()
    log.info("Servidor Arremate Certo rodando na porta %d", args.port)
    app.run(host=args.host, port=args.port)
    return 0


# ===========================================================================
# Subcomando: listar
# ===========================================================================


def cmd_listar(args: argparse.Namespace) -> int:
    """Baixa, normaliza e filtra os imóveis de uma UF, imprimindo o resultado."""
    from arremate.cache import carregar_imoveis_uf
    from arremate.filtros import converter_valor, filtrar_imoveis

    try:
        min_valor = converter_valor(args.min_valor, "--min-valor")
        max_valor = converter_valor(args.max_valor, "--max-valor")
        imoveis = filtrar_imoveis(
            carregar_imoveis_uf(args.uf),
            modalidade=args.modalidade,
            min_valor=min_valor,
            max_valor=max_valor,
        )
    except ArremateError as e:
        log.error("%s", e)
        return 1

    if args.limite is not None:
        imoveis = imoveis[: args.limite]

    if args.as_json:
        print(
            json.dumps(
                [i.para_dict() for i in imoveis], ensure_ascii=False, indent=2
            )
        )
        return 0

    print(f"\n{'ID':<6} {'CIDADE':<24} {'BAIRRO':<24} {'MODALIDADE':<28} {'VALOR':>14}")
    print("-" * 100)
    for i in imoveis:
        print(
            f"{i.id:<6} {i.cidade[:24]:<24} {i.bairro[:24]:<24} "
            f"{i.modalidade[:28]:<28} {i.valor:>14,.2f}"
        )
    print(f"\nTotal: {len(imoveis)} imóvel(is)")
    return 0


# ===========================================================================
# Subcomando: analisar
# ===========================================================================


def cmd_analisar(args: argparse.Namespace) -> int:
    """Lê um imóvel de um arquivo JSON e imprime a análise do LLM."""
    from arremate.analise_llm import analisar_imovel

    arquivo = Path(args.arquivo)
    try:
        imovel = json.loads(arquivo.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        log.error("Não foi possível ler '%s': %s", arquivo, e)
        return 1

    if not isinstance(imovel, dict):
        log.error("'%s' deve conter um objeto JSON.", arquivo)
        return 1

    try:
        resultado = analisar_imovel(imovel, api_key=args.api_key)
    except ArremateError as e:
        log.error("%s", e)
        return 1

    print(json.dumps(resultado, ensure_ascii=False, indent=2))
    return 0


# ===========================================================================
# Parser
# ===========================================================================


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arremate",
        description="Backend Arremate Certo — imóveis da Caixa com análise por IA.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Logging em nível DEBUG",
    )
    sub = parser.add_subparsers(dest="comando", metavar="COMANDO")

    # --------------------------------------------------------------- servir
    p_srv = sub.add_parser(
        "servir",
        help="Sobe a API HTTP",
        description="Sobe a API HTTP (GET /api/imoveis, POST /api/imoveis/analise).",
    )
    p_srv.add_argument(
        "--host",
        default=HOST,
        help=f"Interface de escuta (padrão: {HOST})",
    )
    p_srv.add_argument(
        "--port",
        type=int,
        default=PORT,
        metavar="PORTA",
        help=f"Porta de escuta (padrão: {PORT}, env PORT)",
    )

    # --------------------------------------------------------------- listar
    p_lst = sub.add_parser(
        "listar",
        help="Lista imóveis de uma UF direto da Caixa",
        description="Baixa o CSV da UF, normaliza e aplica os filtros informados.",
    )
    p_lst.add_argument("--uf", required=True, help="Código da UF (ex: SP)")
    p_lst.add_argument(
        "--modalidade",
        default=None,
        metavar="TEXTO",
        help="Trecho da modalidade, sem diferenciar maiúsculas (ex: leilão)",
    )
    p_lst.add_argument("--min-valor", default=None, metavar="N", help="Valor mínimo")
    p_lst.add_argument("--max-valor", default=None, metavar="N", help="Valor máximo")
    p_lst.add_argument(
        "--limite",
        type=int,
        default=None,
        metavar="N",
        help="Exibe no máximo N imóveis",
    )
    p_lst.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Imprime resultado como JSON em vez de tabela.",
    )

    # --------------------------------------------------------------- analisar
    p_an = sub.add_parser(
        "analisar",
        help="Análise de viabilidade de um imóvel via LLM",
        description="Envia o imóvel de ARQUIVO (JSON) ao LLM e imprime a análise.",
    )
    p_an.add_argument("arquivo", metavar="ARQUIVO", help="JSON com um imóvel")
    p_an.add_argument(
        "--api-key",
        default=None,
        metavar="KEY",
        help="API key do LLM (padrão: env OPENAI_API_KEY)",
    )

    return parser


# ===========================================================================
# Dispatch e entry point
# ===========================================================================

_HANDLER_MAP: dict[str, Callable[[argparse.Namespace], int]] = {
    "servir": cmd_servir,
    "listar": cmd_listar,
    "analisar": cmd_analisar,
}


def main() -> None:
    """Entry point público — chamado por ``python -m arremate`` e pelo script ``arremate``."""
    parser = _build_parser()
    args = parser.parse_args()
    _setup_logging(verbose=args.verbose)

    handler = _HANDLER_MAP.get(args.comando)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    sys.exit(handler(args))

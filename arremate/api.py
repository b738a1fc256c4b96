"""
API HTTP do Arremate Certo (Flask).

Rotas::

    GET  /                      liveness (texto simples)
    GET  /api/imoveis           ?uf=SP[&modalidade=..][&minValor=..][&maxValor=..]
    POST /api/imoveis/analise   corpo JSON = um imóvel

O cache por UF pertence à instância da aplicação (``app.extensions``) e é
criado por :func:`criar_app`.  Erros de domínio são convertidos em JSON
``{"error": ...}`` pelos error handlers registrados aqui.
"""

import logging

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from arremate.analise_llm import analisar_imovel
from arremate.cache import CacheImoveis
from arremate.erros import AdvisoryError, FetchError, ParseError, ValidationError
from arremate.filtros import converter_valor, filtrar_imoveis

log = logging.getLogger(__name__)

MENSAGEM_LIVENESS = "Arremate Certo backend está no ar"


def criar_app(cache: CacheImoveis | None = None, api_key: str | None = None) -> Flask:
    """Cria a aplicação Flask com CORS liberado e cache próprio.

    Args:
        cache:   Cache por UF a usar; um novo :class:`CacheImoveis` por padrão.
        api_key: API key do LLM; ``None`` usa a variável de ambiente.
    """
    app = Flask(__name__)
    app.json.ensure_ascii = False
    CORS(app)

    app.extensions["cache_imoveis"] = cache if cache is not None else CacheImoveis()
    app.extensions["llm_api_key"] = api_key

    _registrar_rotas(app)
    _registrar_erros(app)
    return app


def _cache() -> CacheImoveis:
    return current_app.extensions["cache_imoveis"]


# ===========================================================================
# Rotas
# ===========================================================================


def _registrar_rotas(app: Flask) -> None:
    @app.get("/")
    def liveness():
        return MENSAGEM_LIVENESS, 200, {"Content-Type": "text/plain; charset=utf-8"}

    @app.get("/api/imoveis")
    def listar_imoveis():
        uf = (request.args.get("uf") or "").strip()
        if not uf:
            raise ValidationError("Parâmetro uf é obrigatório (ex: ?uf=SP)")

        min_valor = converter_valor(request.args.get("minValor"), "minValor")
        max_valor = converter_valor(request.args.get("maxValor"), "maxValor")

        imoveis = filtrar_imoveis(
            _cache().obter(uf),
            modalidade=request.args.get("modalidade"),
            min_valor=min_valor,
            max_valor=max_valor,
        )
        log.info("[API] /api/imoveis uf=%s → %d imóveis", uf.upper(), len(imoveis))
        return jsonify([i.para_dict() for i in imoveis])

    @app.post("/api/imoveis/analise")
    def analisar():
        imovel = request.get_json(silent=True)
        # Corpo ausente, inválido ou que não é objeto vira {}
        if not isinstance(imovel, dict):
            imovel = {}

        resultado = analisar_imovel(imovel, api_key=current_app.extensions["llm_api_key"])
        return jsonify(resultado)


# ===========================================================================
# Conversão de erros
# ===========================================================================


def _registrar_erros(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validacao(e: ValidationError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(FetchError)
    def _download(e: FetchError):
        log.error("Erro %s: %s", request.path, e)
        status = f" (status {e.status})" if e.status is not None else ""
        return (
            jsonify(
                {
                    "error": f"Erro ao carregar imóveis da Caixa{status}",
                    "status": e.status,
                }
            ),
            500,
        )

    @app.errorhandler(ParseError)
    def _parse(e: ParseError):
        log.error("Erro %s: %s", request.path, e)
        return jsonify({"error": "Erro ao carregar imóveis da Caixa"}), 500

    @app.errorhandler(AdvisoryError)
    def _analise(e: AdvisoryError):
        log.error("Erro %s: %s", request.path, e)
        return jsonify({"error": "Erro ao gerar análise de IA"}), 500

    @app.errorhandler(Exception)
    def _inesperado(e: Exception):
        # 404, 405... seguem o tratamento padrão do Flask
        if isinstance(e, HTTPException):
            return e
        log.exception("Erro inesperado em %s", request.path)
        return jsonify({"error": "Erro interno"}), 500

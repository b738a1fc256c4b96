"""
Taxonomia de erros do backend.

Cada erro é convertido em resposta JSON na fronteira HTTP (ver
:mod:`arremate.api`):

- :class:`ValidationError` → 400
- :class:`FetchError`      → 500 (mensagem inclui o status upstream, se houver)
- :class:`ParseError`      → 500 genérico
- :class:`AdvisoryError`   → 500 genérico
"""


class ArremateError(Exception):
    """Base de todos os erros de domínio do pacote."""


class ValidationError(ArremateError):
    """Parâmetro obrigatório ausente ou inválido na requisição."""


class FetchError(ArremateError):
    """CSV da Caixa inacessível ou respondido com status de erro.

    Attributes:
        status: Código HTTP devolvido pelo upstream, ou ``None`` quando a falha
                foi de transporte (timeout, conexão recusada, DNS...).
    """

    def __init__(self, mensagem: str, status: int | None = None) -> None:
        super().__init__(mensagem)
        self.status = status


class ParseError(ArremateError):
    """Texto recebido não é um CSV delimitado válido."""


class AdvisoryError(ArremateError):
    """Falha na chamada de IA ou resposta que não é JSON válido."""

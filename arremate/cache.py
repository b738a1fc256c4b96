"""
Cache em memória dos imóveis normalizados, por UF, com janela de validade.

Ciclo de vida: o cache é criado junto com a aplicação
(:func:`arremate.api.criar_app`) e vive até o fim do processo.  Não há
política de remoção nem limite de tamanho; a quantidade de UFs válidas já
limita o crescimento.

Estados por UF::

    ausente ──(download ok)──► fresco ──(TTL expira)──► vencido
                                  ▲                        │
                                  └──(próxima requisição)──┘

Falha ao recarregar propaga para quem chamou e deixa a entrada anterior
intocada; ela não é servida, então a requisição seguinte tenta de novo.
"""

import logging
import threading
import time
from typing import Callable, NamedTuple

from arremate.config import CACHE_TTL_SEGUNDOS
from arremate.download import baixar_csv_caixa
from arremate.normalizacao import Imovel, parse_imoveis_csv

log = logging.getLogger(__name__)

Carregador = Callable[[str], list[Imovel]]


class EntradaCache(NamedTuple):
    imoveis: list[Imovel]
    timestamp: float


def carregar_imoveis_uf(uf: str) -> list[Imovel]:
    """Download + normalização de uma UF (carregador padrão do cache)."""
    return parse_imoveis_csv(baixar_csv_caixa(uf), uf)


class CacheImoveis:
    """Mapa ``UF → (imóveis, timestamp)`` com validade de *ttl* segundos.

    O lock protege apenas o acesso ao dicionário; o download acontece fora
    dele.  Duas requisições simultâneas para a mesma UF vencida podem, por
    isso, baixar o CSV duas vezes; a última a terminar substitui a entrada
    por inteiro.

    Args:
        carregador: Função ``uf → list[Imovel]`` chamada em miss/expiração.
        ttl:        Janela de validade em segundos.
        relogio:    Fonte de tempo (monotônica); injetável nos testes.
    """

    def __init__(
        self,
        carregador: Carregador = carregar_imoveis_uf,
        ttl: float = CACHE_TTL_SEGUNDOS,
        relogio: Callable[[], float] = time.monotonic,
    ) -> None:
        self._carregador = carregador
        self._ttl = ttl
        self._relogio = relogio
        self._entradas: dict[str, EntradaCache] = {}
        self._lock = threading.Lock()

    def obter(self, uf: str) -> list[Imovel]:
        """Devolve os imóveis de *uf*, recarregando se ausente ou vencido.

        Raises:
            FetchError: Falha no download (entrada anterior é preservada).
            ParseError: CSV inválido (entrada anterior é preservada).
        """
        chave = uf.strip().upper()
        agora = self._relogio()

        with self._lock:
            entrada = self._entradas.get(chave)

        if entrada is not None and agora - entrada.timestamp < self._ttl:
            log.debug("[CACHE] %s: hit (%.0fs)", chave, agora - entrada.timestamp)
            return entrada.imoveis

        log.info("[CACHE] %s: %s, recarregando", chave, "vencido" if entrada else "miss")
        imoveis = self._carregador(chave)

        with self._lock:
            self._entradas[chave] = EntradaCache(imoveis, agora)
        return imoveis

    def idade(self, uf: str) -> float | None:
        """Idade em segundos da entrada de *uf*, ou ``None`` se não houver."""
        with self._lock:
            entrada = self._entradas.get(uf.strip().upper())
        if entrada is None:
            return None
        return self._relogio() - entrada.timestamp

    def invalidar(self, uf: str | None = None) -> None:
        """Remove a entrada de *uf*, ou todas quando *uf* é ``None``."""
        with self._lock:
            if uf is None:
                self._entradas.clear()
            else:
                self._entradas.pop(uf.strip().upper(), None)

    def __contains__(self, uf: object) -> bool:
        if not isinstance(uf, str):
            return False
        with self._lock:
            return uf.strip().upper() in self._entradas

    def __len__(self) -> int:
        with self._lock:
            return len(self._entradas)

"""
conftest.py — Fixtures compartilhadas pelos testes.

- ``csv_caixa``: CSV realista (latin-1, ``;``) com colunas em grafias variadas.
- ``imoveis_5``: cinco imóveis já normalizados para testes de filtro.
- ``sem_api_key``: remove ``OPENAI_API_KEY`` do ambiente (autouse).
"""

import pytest

from arremate.normalizacao import Imovel

#: Cabeçalho no estilo "Lista_imoveis_UF.csv" da Caixa (com espaço sobrando)
CSV_CAIXA = (
    " N° do imóvel;UF;Cidade;Bairro;Endereço;Preço;Valor de avaliação;"
    "Modalidade de venda;Tipo de Imóvel;Situação;Área Total\n"
    "8444400001;SP;SAO PAULO;MOOCA;RUA DA MOOCA, N. 100;"
    "250.000,00;300.000,00;Leilão SFI - Edital Único;Apartamento;Ocupado;65,50\n"
    "\n"
    "8444400002;SP;CAMPINAS;CAMBUI;AV NORTE SUL, N. 50;"
    "R$ 1.234.567,89;1.500.000,00;Venda Direta Online;Casa;Desocupado;\n"
    "8444400003;;SANTOS;GONZAGA;RUA XV, N. 7;"
    ";90.000,00;Licitação Aberta;Terreno;;sem informação\n"
)


@pytest.fixture
def csv_caixa() -> str:
    return CSV_CAIXA


@pytest.fixture
def imoveis_5() -> list[Imovel]:
    return [
        Imovel(id=0, uf="SP", modalidade="Leilão Extrajudicial", valor=150_000.0),
        Imovel(id=1, uf="SP", modalidade="Venda Direta", valor=300_000.0),
        Imovel(id=2, uf="RJ", modalidade="LEILÃO SFI", valor=450_000.0),
        Imovel(id=3, uf="SP", modalidade="Licitação Aberta", valor=299_999.99),
        Imovel(id=4, uf="MG", modalidade="Venda Online", valor=800_000.0),
    ]


@pytest.fixture(autouse=True)
def sem_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Garante que nenhum teste dependa de uma API key real no ambiente."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

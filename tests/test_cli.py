"""
Testes para arremate.cli.

Cobre:
- cmd_listar: tabela com total; --json com registros filtrados; --limite
- cmd_listar com FetchError: código de saída 1
- cmd_analisar: lê JSON do arquivo e imprime a análise
- cmd_analisar com arquivo inexistente ou sem objeto: código 1
- cmd_servir: cria a app e chama app.run com host/porta
- main sem subcomando: imprime ajuda e sai com 1
"""

import argparse
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from arremate.cli import cmd_analisar, cmd_listar, cmd_servir, main
from arremate.erros import FetchError

# ===========================================================================
# Helpers
# ===========================================================================


def _args_listar(**kw) -> argparse.Namespace:
    padrao = dict(
        uf="SP",
        modalidade=None,
        min_valor=None,
        max_valor=None,
        limite=None,
        as_json=False,
    )
    padrao.update(kw)
    return argparse.Namespace(**padrao)


# ===========================================================================
# cmd_listar
# ===========================================================================


def test_listar_tabela(imoveis_5, capsys: pytest.CaptureFixture) -> None:
    with patch("arremate.cache.carregar_imoveis_uf", return_value=imoveis_5):
        rc = cmd_listar(_args_listar())

    assert rc == 0
    saida = capsys.readouterr().out
    assert "Total: 5 imóvel(is)" in saida
    assert "Leilão Extrajudicial" in saida


def test_listar_json_filtrado(imoveis_5, capsys: pytest.CaptureFixture) -> None:
    with patch("arremate.cache.carregar_imoveis_uf", return_value=imoveis_5):
        rc = cmd_listar(_args_listar(modalidade="leilão", as_json=True))

    assert rc == 0
    dados = json.loads(capsys.readouterr().out)
    assert [d["id"] for d in dados] == [0, 2]


def test_listar_limite(imoveis_5, capsys: pytest.CaptureFixture) -> None:
    with patch("arremate.cache.carregar_imoveis_uf", return_value=imoveis_5):
        cmd_listar(_args_listar(limite=2, as_json=True))

    assert len(json.loads(capsys.readouterr().out)) == 2


def test_listar_falha_download_retorna_1() -> None:
    with patch(
        "arremate.cache.carregar_imoveis_uf",
        side_effect=FetchError("Caixa respondeu status 503", status=503),
    ):
        assert cmd_listar(_args_listar()) == 1


def test_listar_valor_invalido_retorna_1() -> None:
    with patch("arremate.cache.carregar_imoveis_uf") as carregar:
        assert cmd_listar(_args_listar(min_valor="muito")) == 1
    carregar.assert_not_called()


# ===========================================================================
# cmd_analisar
# ===========================================================================


def test_analisar_imprime_json(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    arquivo = tmp_path / "imovel.json"
    arquivo.write_text(json.dumps({"uf": "SP", "cidade": "SANTOS"}), encoding="utf-8")
    args = argparse.Namespace(arquivo=str(arquivo), api_key="fake-key")

    with patch(
        "arremate.analise_llm.analisar_imovel", return_value={"score": 55}
    ) as analisar:
        rc = cmd_analisar(args)

    assert rc == 0
    assert json.loads(capsys.readouterr().out) == {"score": 55}
    analisar.assert_called_once_with({"uf": "SP", "cidade": "SANTOS"}, api_key="fake-key")


def test_analisar_arquivo_inexistente(tmp_path: Path) -> None:
    args = argparse.Namespace(arquivo=str(tmp_path / "nada.json"), api_key=None)
    assert cmd_analisar(args) == 1


def test_analisar_arquivo_sem_objeto(tmp_path: Path) -> None:
    arquivo = tmp_path / "lista.json"
    arquivo.write_text("[1, 2]", encoding="utf-8")
    args = argparse.Namespace(arquivo=str(arquivo), api_key=None)

    assert cmd_analisar(args) == 1


def test_analisar_sem_api_key_retorna_1(tmp_path: Path) -> None:
    arquivo = tmp_path / "imovel.json"
    arquivo.write_text("{}", encoding="utf-8")
    args = argparse.Namespace(arquivo=str(arquivo), api_key=None)

    assert cmd_analisar(args) == 1


# ===========================================================================
# cmd_servir / main
# ===========================================================================


def test_servir_chama_app_run() -> None:
    args = argparse.Namespace(host="127.0.0.1", port=5055)

    with patch("flask.Flask.run") as run:
        rc = cmd_servir(args)

    assert rc == 0
    run.assert_called_once_with(host="127.0.0.1", port=5055)


def test_main_sem_subcomando_sai_com_1(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.argv", ["arremate"])

    with pytest.raises(SystemExit) as exc:
        main()

    assert exc.value.code == 1

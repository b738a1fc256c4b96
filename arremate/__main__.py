"""
Ponto de entrada de ``python -m arremate``.

Delega imediatamente para :func:`arremate.cli.main`.

Uso::

    python -m arremate --help
    python -m arremate servir --port 4000
    python -m arremate listar --uf SP --modalidade leilão
"""

from arremate.cli import main

if __name__ == "__main__":
    main()

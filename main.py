"""Launcher que inicia o servidor HTTP da API de eventos.

Ao executar `python main.py` este script cria a aplicação Flask e a serve
em HOST:PORT (definidos em `config.py` / variáveis de ambiente).
"""
import logging
import sys

from app import create_app
from app.errors import StorageError


def run_server():
    try:
        app = create_app()
    except StorageError as e:
        logging.error("Falha ao abrir o arquivo de dados: %s", e)
        sys.exit(1)

    # bloqueia até o usuário encerrar
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=app.config["DEBUG"])


if __name__ == '__main__':
    run_server()

from flask import Flask

from config import Config

from .errors import register_error_handlers
from .logging_config import setup_logging
from .storage import JsonStore

STORE_KEY = "eventos_store"


def create_app(test_config=None, store=None):
    """Cria a aplicação Flask.

    `store` permite injetar um JsonStore já pronto (ex.: em memória nos testes);
    sem ele, o arquivo configurado em DATA_FILE é usado.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config is not None:
        app.config.from_mapping(test_config)

    # registros mantêm a ordem dos campos
    app.json.sort_keys = False
    app.json.ensure_ascii = False

    setup_logging(app)

    if store is None:
        store = JsonStore(app.config["DATA_FILE"])
    app.extensions[STORE_KEY] = store

    from .routes.docs import docs
    from .routes.eventos import eventos

    app.register_blueprint(eventos, url_prefix=app.config["EVENTOS_URL_PREFIX"])
    app.register_blueprint(docs)
    register_error_handlers(app)

    app.logger.info("API de eventos pronta (dados em %s)", store.path or "memória")
    return app

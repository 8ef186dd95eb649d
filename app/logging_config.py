import logging
import os
from logging.handlers import TimedRotatingFileHandler

from flask import request

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(app):
    """Configura os logs da aplicação: console sempre, arquivo quando LOG_DIR estiver definido."""

    log_level_str = app.config.get("LOG_LEVEL", "INFO")
    log_level = getattr(logging, str(log_level_str).upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    handlers = []
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    log_dir = app.config.get("LOG_DIR")
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            os.path.join(log_dir, "eventos.log"), when="midnight", backupCount=14, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    app.logger.setLevel(log_level)
    for name in ("eventos", "eventos.api", "eventos.storage"):
        named_logger = logging.getLogger(name)
        named_logger.setLevel(log_level)
        # evita handlers duplicados quando create_app é chamado várias vezes (testes)
        if name == "eventos":
            for h in list(named_logger.handlers):
                named_logger.removeHandler(h)
                h.close()
            for h in handlers:
                named_logger.addHandler(h)

    access_logger = logging.getLogger("eventos.api")

    @app.after_request
    def log_request(response):
        access_logger.info("%s %s -> %s", request.method, request.path, response.status_code)
        return response

"""
Exceções da API de eventos e tradução delas para respostas JSON.

Todas as respostas de erro têm o formato `{"erro": <mensagem>, "codigo": <código>}`.
"""
import functools
import logging

from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException

api_logger = logging.getLogger("eventos.api")


class EventosError(Exception):
    status_code = 500
    codigo = "internal_error"

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class EventoNotFoundError(EventosError):
    status_code = 404
    codigo = "not_found"

    def __init__(self, evento_id: str):
        super().__init__(f"Evento com ID {evento_id} não encontrado", {"id": evento_id})


class InvalidPayloadError(EventosError):
    status_code = 400
    codigo = "invalid_payload"


class StorageError(EventosError):
    status_code = 500
    codigo = "storage_error"


def error_response(message: str, codigo: str, status: int, detalhe: dict = None):
    body = {"erro": message, "codigo": codigo}
    if detalhe:
        body["detalhe"] = detalhe
    return jsonify(body), status


def _unexpected(e: Exception, where: str):
    api_logger.error("Erro inesperado em %s: %s", where, e, exc_info=True)
    detalhe = None
    if current_app.config.get("DEBUG"):
        detalhe = {"tipo": type(e).__name__}
    return error_response("Erro interno do servidor", "internal_error", 500, detalhe)


def handle_api_errors(f):
    """
    Decorator para os endpoints que alteram a coleção.
    Exceções conhecidas viram o status correspondente; qualquer outra vira 500.
    """
    @functools.wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except EventosError as e:
            if e.status_code >= 500:
                api_logger.error("Falha em %s: %s", f.__name__, e.message)
            else:
                api_logger.warning("%s em %s: %s", e.codigo, f.__name__, e.message)
            return error_response(e.message, e.codigo, e.status_code)
        except Exception as e:
            return _unexpected(e, f.__name__)

    return decorated_function


def register_error_handlers(app):
    """Handlers globais: cobrem o caminho de leitura e rotas inexistentes."""

    @app.errorhandler(EventosError)
    def _eventos_error(e):
        if e.status_code >= 500:
            api_logger.error("Falha: %s", e.message)
        return error_response(e.message, e.codigo, e.status_code)

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return error_response(e.description, e.name.lower().replace(" ", "_"), e.code)

    @app.errorhandler(Exception)
    def _any_error(e):
        return _unexpected(e, "request")

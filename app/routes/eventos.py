from flask import Blueprint, current_app, jsonify, request

from ..errors import EventoNotFoundError, InvalidPayloadError, handle_api_errors
from ..models import Evento, generate_unique_id

"""
Recurso `eventos`: CRUD sobre a coleção "eventos" do JsonStore da aplicação.
O store é injetado por `create_app` em `app.extensions["eventos_store"]`.
"""

COLLECTION = "eventos"

eventos = Blueprint("eventos", __name__)


def get_store():
    return current_app.extensions["eventos_store"]


def _payload() -> dict:
    dados = request.get_json(silent=True)
    if not isinstance(dados, dict):
        raise InvalidPayloadError("Corpo da requisição deve ser um objeto JSON")
    return dados


@eventos.route("/", methods=["GET"], strict_slashes=False)
def listar_eventos():
    return jsonify(get_store().collection(COLLECTION))


@eventos.route("/<evento_id>", methods=["GET"])
def obter_evento(evento_id):
    evento = get_store().find(COLLECTION, evento_id)
    if evento is None:
        raise EventoNotFoundError(evento_id)
    return jsonify(evento)


@eventos.route("/", methods=["POST"], strict_slashes=False)
@handle_api_errors
def criar_evento():
    dados = _payload()
    length = current_app.config.get("ID_LENGTH", 8)

    # id gerado é a base; um id enviado pelo cliente prevalece
    evento = get_store().append_with_id(
        COLLECTION,
        dados,
        lambda existentes: generate_unique_id(existentes, length),
        build=lambda d: Evento.from_dict(d).to_dict(),
    )
    return jsonify(evento)


@eventos.route("/<evento_id>", methods=["PUT"])
@handle_api_errors
def atualizar_evento(evento_id):
    dados = _payload()
    evento = get_store().merge_update(COLLECTION, evento_id, dados)
    if evento is None:
        raise EventoNotFoundError(evento_id)
    return jsonify(evento)


@eventos.route("/<evento_id>", methods=["DELETE"])
def remover_evento(evento_id):
    removidos = get_store().remove_all(COLLECTION, evento_id)
    if not removidos:
        raise EventoNotFoundError(evento_id)
    return "", 200

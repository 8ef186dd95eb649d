"""
Documentação OpenAPI 3.0 do recurso de eventos.
Swagger UI em /api-docs, documento JSON em /api-docs/openapi.json
"""

from flask import Blueprint, current_app, jsonify, render_template_string, url_for

docs = Blueprint("docs", __name__)

_ID_PARAM = {
    "in": "path",
    "name": "id",
    "schema": {"type": "string"},
    "required": True,
    "description": "O id do evento",
}

_EVENTO_REF = {"$ref": "#/components/schemas/Eventos"}
_ERRO_REF = {"$ref": "#/components/schemas/Erro"}


def _json(schema):
    return {"application/json": {"schema": schema}}


def build_openapi_spec(prefix: str = "/eventos") -> dict:
    return {
        "openapi": "3.0.0",
        "info": {
            "title": "Eventos API",
            "description": "API para gerenciamento de eventos",
            "version": "1.0.0",
        },
        "servers": [{"url": "/", "description": "Servidor atual"}],
        "tags": [{"name": "Eventos", "description": "The eventos managing API"}],
        "components": {
            "schemas": {
                "Eventos": {
                    "type": "object",
                    "required": ["name", "costo"],
                    "properties": {
                        "id": {"type": "string", "description": "Id gerado automaticamente"},
                        "name": {"type": "string", "description": "Nome do evento"},
                        "costo": {"type": "string", "description": "S/"},
                    },
                    "additionalProperties": True,
                    "example": {"id": "d5fE_asz", "name": "Animación", "costo": "s/5000"},
                },
                "Erro": {
                    "type": "object",
                    "properties": {
                        "erro": {"type": "string"},
                        "codigo": {"type": "string"},
                    },
                },
            }
        },
        "paths": {
            prefix: {
                "get": {
                    "summary": "Retorna a lista de todos os eventos",
                    "tags": ["Eventos"],
                    "responses": {
                        "200": {
                            "description": "A lista de eventos",
                            "content": _json({"type": "array", "items": _EVENTO_REF}),
                        }
                    },
                },
                "post": {
                    "summary": "Cria um novo evento",
                    "tags": ["Eventos"],
                    "requestBody": {"required": True, "content": _json(_EVENTO_REF)},
                    "responses": {
                        "200": {"description": "Evento criado", "content": _json(_EVENTO_REF)},
                        "400": {"description": "Corpo inválido", "content": _json(_ERRO_REF)},
                        "500": {"description": "Erro no servidor", "content": _json(_ERRO_REF)},
                    },
                },
            },
            prefix + "/{id}": {
                "get": {
                    "summary": "Obtém o evento pelo id",
                    "tags": ["Eventos"],
                    "parameters": [_ID_PARAM],
                    "responses": {
                        "200": {"description": "O evento", "content": _json(_EVENTO_REF)},
                        "404": {"description": "Evento não encontrado", "content": _json(_ERRO_REF)},
                    },
                },
                "put": {
                    "summary": "Atualiza o evento pelo id (mescla os campos enviados)",
                    "tags": ["Eventos"],
                    "parameters": [_ID_PARAM],
                    "requestBody": {"required": True, "content": _json(_EVENTO_REF)},
                    "responses": {
                        "200": {"description": "Evento atualizado", "content": _json(_EVENTO_REF)},
                        "400": {"description": "Corpo inválido", "content": _json(_ERRO_REF)},
                        "404": {"description": "Evento não encontrado", "content": _json(_ERRO_REF)},
                        "500": {"description": "Erro no servidor", "content": _json(_ERRO_REF)},
                    },
                },
                "delete": {
                    "summary": "Remove o evento pelo id",
                    "tags": ["Eventos"],
                    "parameters": [_ID_PARAM],
                    "responses": {
                        "200": {"description": "Evento removido"},
                        "404": {"description": "Evento não encontrado", "content": _json(_ERRO_REF)},
                    },
                },
            },
        },
    }


SWAGGER_UI_HTML = """
<!DOCTYPE html>
<html lang="pt-BR">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Eventos API Documentation</title>
    <link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/swagger-ui-dist@5/swagger-ui.css">
    <style>
        body { margin: 0; padding: 0; }
    </style>
</head>
<body>
    <div id="swagger-ui"></div>
    <script src="https://cdn.jsdelivr.net/npm/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
    <script src="https://cdn.jsdelivr.net/npm/swagger-ui-dist@5/swagger-ui-standalone-preset.js"></script>
    <script>
        window.onload = function() {
            SwaggerUIBundle({
                url: '{{ spec_url }}',
                dom_id: '#swagger-ui',
                deepLinking: true,
                presets: [
                    SwaggerUIBundle.presets.apis,
                    SwaggerUIStandalonePreset
                ],
                layout: "StandaloneLayout"
            });
        };
    </script>
</body>
</html>
"""


@docs.route("/api-docs", methods=["GET"])
def api_documentation():
    """Swagger UI apontando para o documento OpenAPI."""
    return render_template_string(SWAGGER_UI_HTML, spec_url=url_for("docs.openapi_spec"))


@docs.route("/api-docs/openapi.json", methods=["GET"])
def openapi_spec():
    return jsonify(build_openapi_spec(current_app.config.get("EVENTOS_URL_PREFIX", "/eventos")))

"""
Configuração global de testes para pytest.

Fixtures:
- app Flask em modo de teste, com arquivo de dados temporário
- cliente HTTP de teste
- acesso direto ao JsonStore da aplicação
"""

import pytest

from app import STORE_KEY, create_app


@pytest.fixture
def data_file(tmp_path):
    return str(tmp_path / "db.json")


@pytest.fixture
def app(data_file):
    app = create_app({
        "TESTING": True,
        "DATA_FILE": data_file,
        "EVENTOS_URL_PREFIX": "/eventos",
        "ID_LENGTH": 8,
        "LOG_DIR": None,
        "DEBUG": False,
    })
    yield app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def store(app):
    return app.extensions[STORE_KEY]


@pytest.fixture
def animacion(client):
    """Evento já criado via API."""
    resp = client.post("/eventos", json={"name": "Animación", "costo": "s/5000"})
    assert resp.status_code == 200
    return resp.get_json()

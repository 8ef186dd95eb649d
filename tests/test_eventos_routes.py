import json
import logging
import threading
from logging.handlers import TimedRotatingFileHandler

import pytest

from app import create_app
from app.errors import StorageError
from app.models import ID_ALPHABET
from app.storage import JsonStore


def test_listar_vazio(client):
    resp = client.get("/eventos")
    assert resp.status_code == 200
    assert resp.get_json() == []


def test_criar_evento_gera_id(client):
    resp = client.post("/eventos", json={"name": "Animación", "costo": "s/5000"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert list(data) == ["id", "name", "costo"]
    assert len(data["id"]) == 8
    assert all(c in ID_ALPHABET for c in data["id"])
    assert data["name"] == "Animación"
    assert data["costo"] == "s/5000"


def test_criar_evento_aceita_campos_extras(client):
    data = client.post("/eventos", json={"name": "Show", "costo": "s/10", "lugar": "Lima"}).get_json()
    assert data["lugar"] == "Lima"
    assert client.get(f"/eventos/{data['id']}").get_json()["lugar"] == "Lima"


def test_id_do_cliente_prevalece(client):
    data = client.post("/eventos", json={"id": "meu-id", "name": "Show", "costo": "s/1"}).get_json()
    assert data["id"] == "meu-id"
    assert client.get("/eventos/meu-id").status_code == 200


def test_ids_unicos(client):
    ids = {client.post("/eventos", json={"name": f"e{i}", "costo": "s/1"}).get_json()["id"] for i in range(30)}
    assert len(ids) == 30


def test_listar_preserva_ordem_de_criacao(client):
    criados = [client.post("/eventos", json={"name": n, "costo": "s/1"}).get_json() for n in ("a", "b", "c")]
    assert client.get("/eventos/").get_json() == criados


def test_obter_evento(client, animacion):
    resp = client.get(f"/eventos/{animacion['id']}")
    assert resp.status_code == 200
    assert resp.get_json() == animacion


def test_obter_evento_inexistente(client):
    resp = client.get("/eventos/doesnotexist")
    assert resp.status_code == 404
    assert resp.get_json() == {
        "erro": "Evento com ID doesnotexist não encontrado",
        "codigo": "not_found",
    }


def test_atualizar_mescla_campos(client, animacion):
    resp = client.put(f"/eventos/{animacion['id']}", json={"costo": "s/6000"})
    assert resp.status_code == 200
    esperado = {"id": animacion["id"], "name": "Animación", "costo": "s/6000"}
    assert resp.get_json() == esperado
    assert client.get(f"/eventos/{animacion['id']}").get_json() == esperado


def test_atualizar_adiciona_campos_novos(client, animacion):
    data = client.put(f"/eventos/{animacion['id']}", json={"fecha": "2024-05-01"}).get_json()
    assert data == {**animacion, "fecha": "2024-05-01"}


def test_atualizar_inexistente(client):
    resp = client.put("/eventos/nada", json={"costo": "s/1"})
    assert resp.status_code == 404
    assert resp.get_json()["codigo"] == "not_found"


def test_corpo_invalido(client, animacion):
    resp = client.post("/eventos", data="[1, 2]", content_type="application/json")
    assert resp.status_code == 400
    assert resp.get_json()["codigo"] == "invalid_payload"

    resp = client.put(f"/eventos/{animacion['id']}", data="{", content_type="application/json")
    assert resp.status_code == 400


def test_remover_evento(client, animacion):
    resp = client.delete(f"/eventos/{animacion['id']}")
    assert resp.status_code == 200
    assert resp.data == b""
    assert client.get(f"/eventos/{animacion['id']}").status_code == 404
    assert client.get("/eventos").get_json() == []


def test_remover_inexistente(client):
    resp = client.delete("/eventos/nada")
    assert resp.status_code == 404


def test_remover_todos_com_mesmo_id(client, store):
    store.append("eventos", {"id": "dup", "name": "a"})
    store.append("eventos", {"id": "dup", "name": "b"})
    store.append("eventos", {"id": "outro", "name": "c"})
    assert client.delete("/eventos/dup").status_code == 200
    assert [e["id"] for e in client.get("/eventos").get_json()] == ["outro"]


def test_alteracoes_gravadas_no_arquivo(client, data_file, animacion):
    client.put(f"/eventos/{animacion['id']}", json={"costo": "s/7000"})
    with open(data_file, encoding="utf-8") as f:
        doc = json.load(f)
    assert doc["eventos"] == [{**animacion, "costo": "s/7000"}]


def test_falha_de_gravacao_vira_500(client, store, monkeypatch):
    def falha(*args, **kwargs):
        raise StorageError("disco cheio")

    monkeypatch.setattr(store, "persist", falha)
    resp = client.post("/eventos", json={"name": "x", "costo": "s/1"})
    assert resp.status_code == 500
    assert resp.get_json() == {"erro": "disco cheio", "codigo": "storage_error"}


def test_erro_inesperado_vira_500_generico(client, store, monkeypatch):
    def quebra(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(store, "merge_update", quebra)
    resp = client.put("/eventos/abc", json={"costo": "s/1"})
    assert resp.status_code == 500
    assert resp.get_json() == {"erro": "Erro interno do servidor", "codigo": "internal_error"}


def test_rota_inexistente_responde_json(client):
    resp = client.get("/nao-existe")
    assert resp.status_code == 404
    assert resp.get_json()["codigo"] == "not_found"


def test_metodo_nao_permitido(client):
    resp = client.patch("/eventos/abc", json={})
    assert resp.status_code == 405
    assert "erro" in resp.get_json()


def test_store_injetado_em_memoria():
    store = JsonStore(None)
    app = create_app({"TESTING": True}, store=store)
    client = app.test_client()
    data = client.post("/eventos", json={"name": "Animación", "costo": "s/5000"}).get_json()
    assert store.find("eventos", data["id"]) == data


@pytest.mark.parametrize("prefix", ["/api/eventos"])
def test_prefixo_configuravel(data_file, prefix):
    app = create_app({"TESTING": True, "DATA_FILE": data_file, "EVENTOS_URL_PREFIX": prefix})
    client = app.test_client()
    assert client.get(prefix).status_code == 200
    assert client.get("/eventos").status_code == 404


def test_criar_sem_id_livre_vira_500(client, monkeypatch):
    monkeypatch.setattr("app.routes.eventos.generate_unique_id", lambda *args, **kwargs: None)
    resp = client.post("/eventos", json={"name": "x", "costo": "s/1"})
    assert resp.status_code == 500
    assert resp.get_json() == {"erro": "Não foi possível gerar um id livre", "codigo": "storage_error"}
    assert client.get("/eventos").get_json() == []


def test_debug_inclui_tipo_do_erro(data_file, monkeypatch):
    app = create_app({"TESTING": True, "DATA_FILE": data_file, "DEBUG": True})
    store = app.extensions["eventos_store"]

    def quebra(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(store, "merge_update", quebra)
    resp = app.test_client().put("/eventos/abc", json={"costo": "s/1"})
    assert resp.status_code == 500
    assert resp.get_json() == {
        "erro": "Erro interno do servidor",
        "codigo": "internal_error",
        "detalhe": {"tipo": "RuntimeError"},
    }


def test_criacoes_concorrentes_nao_perdem_registros(app, client, data_file):
    erros = []

    def criar(n):
        c = app.test_client()
        for i in range(20):
            resp = c.post("/eventos", json={"name": f"t{n}-{i}", "costo": "s/1"})
            if resp.status_code != 200:
                erros.append(resp.status_code)

    threads = [threading.Thread(target=criar, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert erros == []
    eventos = client.get("/eventos").get_json()
    assert len(eventos) == 160
    assert len({e["id"] for e in eventos}) == 160
    with open(data_file, encoding="utf-8") as f:
        assert len(json.load(f)["eventos"]) == 160


def test_log_dir_adiciona_arquivo_rotativo(tmp_path, data_file):
    log_dir = tmp_path / "logs"
    create_app({"TESTING": True, "DATA_FILE": data_file, "LOG_DIR": str(log_dir)})
    rotativos = [h for h in logging.getLogger("eventos").handlers if isinstance(h, TimedRotatingFileHandler)]
    assert len(rotativos) == 1
    assert rotativos[0].baseFilename == str(log_dir / "eventos.log")

    # recriar a aplicação fecha o handler anterior
    create_app({"TESTING": True, "DATA_FILE": data_file, "LOG_DIR": None})
    assert rotativos[0].stream is None
    assert not [h for h in logging.getLogger("eventos").handlers if isinstance(h, TimedRotatingFileHandler)]


def test_api_docs_swagger_ui(client):
    resp = client.get("/api-docs")
    assert resp.status_code == 200
    assert resp.mimetype == "text/html"
    html = resp.get_data(as_text=True)
    assert 'id="swagger-ui"' in html
    assert "/api-docs/openapi.json" in html


def test_api_docs_openapi_json(client):
    resp = client.get("/api-docs/openapi.json")
    assert resp.status_code == 200
    doc = resp.get_json()
    assert doc["openapi"] == "3.0.0"
    assert set(doc["paths"]["/eventos/{id}"]) == {"get", "put", "delete"}
    assert doc["components"]["schemas"]["Eventos"]["required"] == ["name", "costo"]

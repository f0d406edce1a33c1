# tests/integration/test_api_maps.py
import logging

import pytest
from fastapi.testclient import TestClient

UNKNOWN_UUID = "00000000-0000-4000-8000-000000000000"


def _create_map(client: TestClient, root_name: str | None = "Root") -> dict:
    body = {"rootNode": {"name": root_name}} if root_name else None
    response = client.post("/api/maps", json=body)
    assert response.status_code == 201
    return response.json()


def test_criar_mapa_retorna_entrada_admin(client: TestClient) -> None:
    data = _create_map(client, "Planejamento")

    assert set(data) == {"id", "adminId", "modificationSecret", "ttl", "rootName"}
    assert data["rootName"] == "Planejamento"
    assert data["adminId"] != data["modificationSecret"]


def test_criar_mapa_sem_corpo(client: TestClient) -> None:
    response = client.post("/api/maps")
    assert response.status_code == 201
    assert response.json()["rootName"] is None


def test_obter_mapa_retorna_200(client: TestClient) -> None:
    created = _create_map(client)

    response = client.get(f"/api/maps/{created['id']}")

    assert response.status_code == 200
    data = response.json()
    assert data["uuid"] == created["id"]
    assert data["deleteAfterDays"] == 30
    assert data["deletedAt"] == created["ttl"]
    assert data["options"] == {"fontMaxSize": 70, "fontMinSize": 15, "fontIncrement": 5}
    assert len(data["data"]) == 1
    assert data["data"][0]["isRoot"] is True
    assert data["data"][0]["name"] == "Root"


def test_uuid_malformado_retorna_422(client: TestClient) -> None:
    response = client.get("/api/maps/not-a-uuid")
    assert response.status_code == 422


def test_mapa_nao_encontrado_retorna_404(client: TestClient) -> None:
    response = client.get(f"/api/maps/{UNKNOWN_UUID}")
    assert response.status_code == 404
    assert "detail" in response.json()


def test_put_mapa_reconstroi_arvore(client: TestClient) -> None:
    created = _create_map(client)
    body = {
        "uuid": created["id"],
        "data": [
            {"id": "r", "isRoot": True, "name": "Nova raiz"},
            {"id": "c", "parent": "r", "name": "Filho"},
            {"id": "orfao", "parent": "nao-existe"},
        ],
    }

    response = client.put(f"/api/maps/{created['id']}", json=body)

    assert response.status_code == 200
    assert [n["id"] for n in response.json()["data"]] == ["r", "c"]


def test_put_mapa_uuid_divergente_retorna_422(client: TestClient) -> None:
    created = _create_map(client)
    response = client.put(f"/api/maps/{created['id']}", json={"uuid": UNKNOWN_UUID, "data": []})
    assert response.status_code == 422


def test_put_mapa_inexistente_retorna_404(client: TestClient) -> None:
    response = client.put(f"/api/maps/{UNKNOWN_UUID}", json={"uuid": UNKNOWN_UUID, "data": []})
    assert response.status_code == 404


def test_put_opcoes(client: TestClient) -> None:
    created = _create_map(client)

    response = client.put(
        f"/api/maps/{created['id']}/options",
        json={"fontMaxSize": 90, "fontMinSize": 10, "fontIncrement": 2},
    )

    assert response.status_code == 200
    assert response.json()["options"] == {"fontMaxSize": 90, "fontMinSize": 10, "fontIncrement": 2}


def test_put_opcoes_invalidas_retorna_422(client: TestClient) -> None:
    created = _create_map(client)
    response = client.put(
        f"/api/maps/{created['id']}/options",
        json={"fontMaxSize": 10, "fontMinSize": 20, "fontIncrement": 2},
    )
    assert response.status_code == 422


def test_delete_mapa(client: TestClient) -> None:
    created = _create_map(client)

    response = client.delete(f"/api/maps/{created['id']}")

    assert response.status_code == 204
    assert client.get(f"/api/maps/{created['id']}").status_code == 404


def test_headers_seguranca_presentes(client: TestClient) -> None:
    response = client.get(f"/api/maps/{UNKNOWN_UUID}")
    assert response.headers.get("X-Content-Type-Options") == "nosniff"
    assert response.headers.get("X-Frame-Options") == "DENY"
    assert response.headers.get("Referrer-Policy") == "strict-origin-when-cross-origin"


def test_startup_aplica_schema_e_loga_banco(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    from mapstore.interfaces.api.main import app

    caplog.set_level(logging.INFO, logger="mapstore.interfaces.api.main")
    with TestClient(app) as restarted:
        assert restarted.get(f"/api/maps/{UNKNOWN_UUID}").status_code == 404

    messages = [r.getMessage() for r in caplog.records if r.name == "mapstore.interfaces.api.main"]
    assert any("Mapstore API up" in m and "delete_after_days=30" in m for m in messages)

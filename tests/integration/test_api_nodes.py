# tests/integration/test_api_nodes.py
from fastapi.testclient import TestClient


def _map_with_root(client: TestClient) -> tuple[str, str]:
    map_id = client.post("/api/maps", json={"rootNode": {"name": "Root"}}).json()["id"]
    root_id = client.get(f"/api/maps/{map_id}/nodes").json()[0]["id"]
    return map_id, root_id


def test_listar_nos(client: TestClient) -> None:
    map_id, root_id = _map_with_root(client)

    response = client.get(f"/api/maps/{map_id}/nodes")

    assert response.status_code == 200
    assert [n["id"] for n in response.json()] == [root_id]


def test_listar_nos_mapa_malformado(client: TestClient) -> None:
    assert client.get("/api/maps/not-a-uuid/nodes").status_code == 422


def test_importar_nos_reporta_rejeitados(client: TestClient) -> None:
    map_id, root_id = _map_with_root(client)

    response = client.post(
        f"/api/maps/{map_id}/nodes",
        json=[
            {"id": "a", "parent": root_id, "name": "A"},
            {"id": "b", "parent": "a"},
            {"id": "x", "parent": "missing"},
            {"id": "d", "detached": True, "parent": root_id},
        ],
    )

    assert response.status_code == 200
    assert response.json() == {"inserted": ["a", "b"], "rejected": ["x", "d"]}


def test_atualizar_no(client: TestClient) -> None:
    map_id, root_id = _map_with_root(client)

    response = client.put(
        f"/api/maps/{map_id}/nodes/{root_id}",
        json={"id": root_id, "isRoot": True, "name": "Renomeado", "colors": {"branch": "#abc"}},
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Renomeado"
    assert response.json()["colors"]["branch"] == "#abc"


def test_atualizar_no_inexistente_retorna_404(client: TestClient) -> None:
    map_id, _ = _map_with_root(client)
    response = client.put(f"/api/maps/{map_id}/nodes/ghost", json={"id": "ghost"})
    assert response.status_code == 404


def test_atualizar_no_detached_com_pai_retorna_422(client: TestClient) -> None:
    map_id, root_id = _map_with_root(client)
    client.post(f"/api/maps/{map_id}/nodes", json=[{"id": "a", "parent": root_id}])

    response = client.put(
        f"/api/maps/{map_id}/nodes/a",
        json={"id": "a", "parent": root_id, "detached": True},
    )

    assert response.status_code == 422


def test_remover_no(client: TestClient) -> None:
    map_id, root_id = _map_with_root(client)
    client.post(f"/api/maps/{map_id}/nodes", json=[{"id": "a", "parent": root_id}])

    response = client.delete(f"/api/maps/{map_id}/nodes/a")

    assert response.status_code == 200
    assert response.json()["id"] == "a"
    assert [n["id"] for n in client.get(f"/api/maps/{map_id}/nodes").json()] == [root_id]


def test_remover_no_inexistente_retorna_404(client: TestClient) -> None:
    map_id, _ = _map_with_root(client)
    assert client.delete(f"/api/maps/{map_id}/nodes/ghost").status_code == 404

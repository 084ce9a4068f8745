"""HTTP API tests using FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from lifeboard.api.app import create_app
from lifeboard.config import Settings
from lifeboard.core.grid import Grid
from lifeboard.service.boards import BoardService


BLINKER = Grid.from_cells(5, 5, [(2, 1), (2, 2), (2, 3)]).to_rows()
BLOCK = Grid.from_cells(4, 4, [(1, 1), (1, 2), (2, 1), (2, 2)]).to_rows()
GLIDER = Grid.from_cells(20, 20, [(1, 2), (2, 3), (3, 1), (3, 2), (3, 3)]).to_rows()


@pytest.fixture
def client():
    service = BoardService(settings=Settings(max_iterations=50, max_dimension=32))
    return TestClient(create_app(service))


def create(client, rows):
    response = client.post("/boards", json={"initialState": rows, "name": "test"})
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateBoard:

    def test_create(self, client):
        body = create(client, BLINKER)

        assert body["id"] == 1
        assert body["state"] == BLINKER
        assert body["width"] == 5
        assert body["height"] == 5
        assert body["generation"] == 0
        assert body["finalState"] is False
        assert body["liveCellCount"] == 3
        assert "createdAt" in body
        assert "updatedAt" in body

    def test_name_optional(self, client):
        response = client.post("/boards", json={"initialState": BLOCK})
        assert response.status_code == 201

    @pytest.mark.parametrize("rows", [[], [[]], [[True, False], [True]]])
    def test_invalid_state(self, client, rows):
        response = client.post("/boards", json={"initialState": rows})
        body = response.json()

        assert response.status_code == 400
        assert body["status"] == 400
        assert body["message"] == "Validation error"
        assert "initialState" in body["errors"]

    def test_missing_state(self, client):
        response = client.post("/boards", json={"name": "empty"})
        assert response.status_code == 400

    def test_too_large(self, client):
        rows = [[False] * 33 for _ in range(3)]
        response = client.post("/boards", json={"initialState": rows})

        assert response.status_code == 400
        assert "maximum dimension" in response.json()["message"]


class TestBoardOperations:

    def test_get_board(self, client):
        created = create(client, BLOCK)
        response = client.get(f"/boards/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_not_found(self, client):
        response = client.get("/boards/99")
        body = response.json()

        assert response.status_code == 404
        assert body["status"] == 404
        assert body["message"] == "Could not find board with id: 99"
        assert "timestamp" in body

    def test_next(self, client):
        created = create(client, BLINKER)
        body = client.get(f"/boards/{created['id']}/next").json()

        assert body["generation"] == 1
        assert body["finalState"] is False
        assert Grid.from_rows(body["state"]).live_cells() == [(1, 2), (2, 2), (3, 2)]

    def test_next_on_still_life(self, client):
        created = create(client, BLOCK)
        body = client.get(f"/boards/{created['id']}/next").json()

        assert body["finalState"] is True
        assert body["state"] == BLOCK

    def test_iterate(self, client):
        created = create(client, BLINKER)
        response = client.get(f"/boards/{created['id']}/iterate/4")

        assert response.status_code == 200
        assert response.json()["generation"] == 4
        assert response.json()["state"] == BLINKER

    def test_iterate_requires_positive_count(self, client):
        created = create(client, BLINKER)
        response = client.get(f"/boards/{created['id']}/iterate/0")
        assert response.status_code == 400

    def test_iterate_above_cap(self, client):
        """Counts beyond the configured cap are refused with 400, not computed."""
        created = create(client, BLINKER)
        response = client.get(f"/boards/{created['id']}/iterate/1000000000")
        body = response.json()

        assert response.status_code == 400
        assert body["status"] == 400
        assert "must not exceed 50" in body["message"]

    def test_iterate_at_cap(self, client):
        created = create(client, BLINKER)
        response = client.get(f"/boards/{created['id']}/iterate/50")

        assert response.status_code == 200
        assert response.json()["generation"] == 50

    def test_final(self, client):
        created = create(client, BLINKER)
        body = client.get(f"/boards/{created['id']}/final").json()

        assert body["finalState"] is True
        assert body["generation"] == 2

    def test_final_not_found_within_cap(self, client):
        created = create(client, GLIDER)
        response = client.get(f"/boards/{created['id']}/final")
        body = response.json()

        assert response.status_code == 500
        assert body["message"] == "Could not determine final state within 50 iterations"

    def test_final_board_is_terminal(self, client):
        created = create(client, BLINKER)
        final = client.get(f"/boards/{created['id']}/final").json()

        assert client.get(f"/boards/{final['id']}/next").json() == final
        assert client.get(f"/boards/{final['id']}/iterate/3").json() == final

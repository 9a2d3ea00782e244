"""
Flask 엔드포인트 테스트 (메모리 TinyDB).
"""

import pytest

from app import create_app


@pytest.fixture
def client():
    app = create_app()
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def load(client, x="3", y="5"):
    return client.post("/arith/circuit/load-example", data={"x": x, "y": y},
                       follow_redirects=True)


class TestCircuitRoutes:

    def test_empty(self, client):
        response = client.get("/arith/circuit")
        assert response.status_code == 200
        assert response.get_json() == {"loaded": False}

    def test_index_redirects(self, client):
        response = client.get("/")
        assert response.status_code == 302

    def test_load_example(self, client):
        data = load(client).get_json()
        assert data["loaded"] is True
        assert data["inputs"] == {"x": "3", "y": "5"}
        assert data["summary"]["gates"] == 4
        assert data["results"]["out"]["value"] == "5"
        assert data["check"] is None

    def test_invalid_input(self, client):
        response = client.post("/arith/circuit/load-example", data={"x": "abc"})
        assert response.status_code == 400

    def test_check(self, client):
        load(client)
        data = client.post("/arith/circuit/check", follow_redirects=True).get_json()
        assert data["check"] == {"satisfied": True, "violations": []}

    def test_check_unsatisfied(self, client):
        load(client, "1000", "300")
        data = client.post("/arith/circuit/check", follow_redirects=True).get_json()
        assert data["check"]["satisfied"] is False
        assert data["check"]["violations"][0]["kind"] == "lookup"

    def test_check_without_circuit(self, client):
        response = client.post("/arith/circuit/check")
        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_clear(self, client):
        load(client)
        data = client.post("/arith/circuit/clear", follow_redirects=True).get_json()
        assert data == {"loaded": False}


class TestExportRoutes:

    def test_table_export(self, client):
        load(client)
        response = client.get("/arith/table/export")
        assert response.mimetype == "text/plain"
        lines = response.get_data(as_text=True).split("\n")
        assert lines[0] == (
            "witnesses_size: 4 public_inputs_size: 1 constants_size: 0 "
            "selectors_size: 5 max_size: 8"
        )

    def test_table_export_wide(self, client):
        load(client)
        text = client.get("/arith/table/export?wide=1").get_data(as_text=True)
        assert text.split("\n")[1].split(" ")[0] == "0" * 63 + "3"

    def test_circuit_export(self, client):
        load(client)
        text = client.get("/arith/circuit/export").get_data(as_text=True)
        assert text.startswith("gates: 4 lookup_gates: 1 selectors: 5 copy_constraints: 12")
        assert "in range_8bit_table/full" in text

    def test_export_without_circuit(self, client):
        assert client.get("/arith/table/export").status_code == 400
        assert client.get("/arith/circuit/export").status_code == 400

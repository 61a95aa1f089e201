"""Integration tests for the error body shape."""

import pytest

pytestmark = pytest.mark.integration


class TestErrorBody:
    def test_validation_error_has_message_and_detail(self, api_client):
        response = api_client.post("/clientes", {"name": "Ana"}, format="json")

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Os dados enviados estão incorretos."
        assert isinstance(data["errorMessage"], str)

    def test_malformed_json(self, api_client):
        response = api_client.post(
            "/clientes", data="{", content_type="application/json"
        )

        assert response.status_code == 400
        assert "message" in response.json()

    def test_not_found_has_only_message(self, api_client):
        response = api_client.get("/pedidos/0190a000-0000-7000-8000-000000000000")

        assert response.status_code == 404
        assert set(response.json()) == {"message"}

    def test_method_not_allowed(self, api_client):
        response = api_client.delete("/entregas/calcular")

        assert response.status_code == 405
        assert "message" in response.json()

    def test_unexpected_error_surfaces_as_500(self, api_client, monkeypatch):
        from modules.clients.services import ClientService

        def _boom(self, filters=None):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(ClientService, "list_clients", _boom)
        api_client.raise_request_exception = False

        response = api_client.get("/clientes")

        assert response.status_code == 500
        assert response.json() == {
            "message": "Ocorreu um erro no servidor.",
            "errorMessage": "connection reset",
        }

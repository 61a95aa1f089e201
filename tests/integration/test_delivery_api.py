"""Integration tests for the /entregas endpoints.

Covers:
- POST /entregas/calcular: pricing, persisted breakdown, errors.
- Status changes through /entregas/status/{id} and /entregas/{id}.
- Monetary patch, listing, deletion.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from modules.deliveries.constants import DeliveryStatus
from modules.deliveries.models import Delivery
from modules.orders.constants import DeliveryType

pytestmark = pytest.mark.integration


# ===========================================================================
# POST /entregas/calcular
# ===========================================================================


class TestCalculate:
    def test_prices_order(self, api_client, make_order):
        order = make_order(
            delivery_type=DeliveryType.URGENT,
            distance_km=Decimal("100"),
            base_rate_per_km=Decimal("3"),
            weight_kg=Decimal("60"),
            base_rate_per_kg=Decimal("1"),
        )

        response = api_client.post(
            "/entregas/calcular", {"order_id": str(order.id)}, format="json"
        )

        body = response.json()
        assert response.status_code == 201
        assert body["message"] == "Entrega calculada com sucesso."
        entrega = body["entrega"]
        assert entrega["id"] == body["id_entrega"]
        assert entrega["distance_cost"] == 300.0
        assert entrega["weight_cost"] == 60.0
        assert entrega["surcharge"] == 72.0
        assert entrega["discount"] == 0.0
        assert entrega["extra_fee"] == 15.0
        assert entrega["final_cost"] == 447.0
        assert entrega["status"] == "calculado"

        delivery = Delivery.objects.get(id=body["id_entrega"])
        assert delivery.final_cost == Decimal("447.00")
        assert delivery.order_id == order.id

    def test_recalculation_creates_new_delivery(self, api_client, make_order):
        order = make_order()

        first = api_client.post("/entregas/calcular", {"order_id": str(order.id)}, format="json")
        second = api_client.post("/entregas/calcular", {"order_id": str(order.id)}, format="json")

        assert first.json()["id_entrega"] != second.json()["id_entrega"]
        assert Delivery.objects.filter(order=order).count() == 2

    def test_order_is_not_modified(self, api_client, make_order):
        order = make_order()
        before = order.updated_at

        api_client.post("/entregas/calcular", {"order_id": str(order.id)}, format="json")

        order.refresh_from_db()
        assert order.updated_at == before

    def test_missing_order_id(self, api_client):
        response = api_client.post("/entregas/calcular", {}, format="json")

        assert response.status_code == 400
        assert Delivery.objects.count() == 0

    def test_malformed_order_id(self, api_client):
        response = api_client.post("/entregas/calcular", {"order_id": "42"}, format="json")

        assert response.status_code == 400

    def test_cost_beyond_column_is_rejected(self, api_client, make_order):
        order = make_order(
            weight_kg=Decimal("999999999.999"),
            distance_km=Decimal("999999999.999"),
            base_rate_per_km=Decimal("99999999.9999"),
        )

        response = api_client.post(
            "/entregas/calcular", {"order_id": str(order.id)}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["message"].startswith(
            "Valor da entrega excede o limite permitido"
        )
        assert Delivery.objects.count() == 0
        assert api_client.get("/entregas").status_code == 200

    def test_unknown_order(self, api_client):
        response = api_client.post(
            "/entregas/calcular", {"order_id": str(uuid.uuid4())}, format="json"
        )

        assert response.status_code == 404
        assert response.json() == {"message": "Pedido não encontrado."}


# ===========================================================================
# Status
# ===========================================================================


class TestStatus:
    def test_status_endpoint(self, api_client, make_delivery):
        delivery = make_delivery()

        response = api_client.put(
            f"/entregas/status/{delivery.id}", {"status": "em_transito"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "em_transito"
        reread = api_client.get(f"/entregas/{delivery.id}")
        assert reread.json()["data"]["status"] == "em_transito"

    def test_repeating_status_is_idempotent(self, api_client, make_delivery):
        delivery = make_delivery()
        url = f"/entregas/status/{delivery.id}"

        api_client.put(url, {"status": "entregue"}, format="json")
        delivery.refresh_from_db()
        updated_at = delivery.updated_at
        response = api_client.put(url, {"status": "entregue"}, format="json")

        assert response.status_code == 200
        delivery.refresh_from_db()
        assert delivery.status == DeliveryStatus.DELIVERED
        assert delivery.updated_at == updated_at

    def test_delivered_back_to_calculated(self, api_client, make_delivery):
        delivery = make_delivery(status=DeliveryStatus.DELIVERED)

        response = api_client.put(
            f"/entregas/{delivery.id}", {"status": "calculado"}, format="json"
        )

        assert response.status_code == 200
        delivery.refresh_from_db()
        assert delivery.status == DeliveryStatus.CALCULATED

    def test_invalid_status(self, api_client, make_delivery):
        delivery = make_delivery()

        response = api_client.put(
            f"/entregas/status/{delivery.id}", {"status": "perdido"}, format="json"
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Status inválido."}

    def test_invalid_status_wins_over_unknown_id(self, api_client):
        response = api_client.put(
            f"/entregas/status/{uuid.uuid4()}", {"status": "perdido"}, format="json"
        )

        assert response.status_code == 400

    def test_unknown_delivery(self, api_client):
        response = api_client.put(
            f"/entregas/status/{uuid.uuid4()}", {"status": "entregue"}, format="json"
        )

        assert response.status_code == 404
        assert response.json() == {"message": "Entrega não encontrada."}


# ===========================================================================
# Update / read / delete
# ===========================================================================


class TestDeliveryUpdate:
    def test_monetary_patch_is_not_recomputed(self, api_client, make_delivery):
        delivery = make_delivery()

        response = api_client.patch(
            f"/entregas/{delivery.id}", {"final_cost": 99.999}, format="json"
        )

        assert response.status_code == 200
        delivery.refresh_from_db()
        assert delivery.final_cost == Decimal("100.00")
        assert delivery.distance_cost == Decimal("50.00")
        assert delivery.status == DeliveryStatus.CALCULATED


    def test_money_beyond_column_is_rejected(self, api_client, make_delivery):
        delivery = make_delivery()

        response = api_client.put(
            f"/entregas/{delivery.id}", {"final_cost": "1e20"}, format="json"
        )

        assert response.status_code == 400
        assert "final_cost" in response.json()["errorMessage"]
        delivery.refresh_from_db()
        assert delivery.final_cost == Decimal("60.00")
        assert api_client.get("/entregas").status_code == 200
        assert api_client.get(f"/entregas/{delivery.id}").status_code == 200


class TestDeliveryRead:
    def test_list_filter_by_status(self, api_client, make_delivery):
        make_delivery()
        delivered = make_delivery(status=DeliveryStatus.DELIVERED)

        response = api_client.get("/entregas", {"status": "entregue"})

        assert [d["id"] for d in response.json()["data"]] == [str(delivered.id)]

    def test_by_order(self, api_client, make_order, make_delivery):
        order = make_order()
        make_delivery(order=order)
        make_delivery()

        response = api_client.get(f"/entregas/pedido/{order.id}")

        data = response.json()["data"]
        assert response.status_code == 200
        assert [d["order_id"] for d in data] == [str(order.id)]

    def test_by_unknown_order_is_empty(self, api_client):
        response = api_client.get(f"/entregas/pedido/{uuid.uuid4()}")

        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_not_found(self, api_client):
        response = api_client.get(f"/entregas/{uuid.uuid4()}")

        assert response.status_code == 404


class TestDeliveryDelete:
    def test_delete(self, api_client, make_delivery):
        delivery = make_delivery()

        response = api_client.delete(f"/entregas/{delivery.id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Entrega deletada com sucesso."}
        assert not Delivery.objects.filter(id=delivery.id).exists()

    def test_not_found(self, api_client):
        response = api_client.delete(f"/entregas/{uuid.uuid4()}")

        assert response.status_code == 404

from __future__ import annotations

from datetime import date
from decimal import Decimal
from itertools import count

import pytest

from rest_framework.test import APIClient

from modules.clients.models import Client
from modules.deliveries.constants import DeliveryStatus
from modules.deliveries.models import Delivery
from modules.orders.constants import DeliveryType
from modules.orders.models import Order

_national_ids = count(10000000000)


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def client_payload(**overrides) -> dict:
    """A valid client body; ``national_id`` is unique per call."""
    payload = {
        "name": "Maria",
        "surname": "Silva",
        "national_id": str(next(_national_ids)),
        "phone": "11999998888",
        "email": "maria@example.com",
        "street_type": "Rua",
        "street": "das Flores",
        "number": "123",
        "district": "Centro",
        "city": "São Paulo",
        "state": "SP",
        "postal_code": "01310100",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def make_client():
    def _make(**overrides) -> Client:
        return Client.objects.create(**client_payload(**overrides))

    return _make


@pytest.fixture()
def make_order(make_client):
    def _make(client: Client | None = None, **overrides) -> Order:
        defaults = {
            "client": client or make_client(),
            "order_date": date(2024, 5, 10),
            "delivery_type": DeliveryType.STANDARD,
            "weight_kg": Decimal("5"),
            "distance_km": Decimal("10"),
            "base_rate_per_km": Decimal("5"),
            "base_rate_per_kg": Decimal("2"),
        }
        defaults.update(overrides)
        return Order.objects.create(**defaults)

    return _make


@pytest.fixture()
def make_delivery(make_order):
    def _make(order: Order | None = None, **overrides) -> Delivery:
        defaults = {
            "order": order or make_order(),
            "distance_cost": Decimal("50.00"),
            "weight_cost": Decimal("10.00"),
            "final_cost": Decimal("60.00"),
            "status": DeliveryStatus.CALCULATED,
        }
        defaults.update(overrides)
        return Delivery.objects.create(**defaults)

    return _make


@pytest.fixture()
def client_body():
    """Factory for valid client request bodies."""
    return client_payload

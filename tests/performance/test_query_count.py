"""Performance regression tests: constant query count on list endpoints.

Listing must not issue one query per row, whatever the number of
records.
"""

from __future__ import annotations

import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext

pytestmark = pytest.mark.integration


def _query_count(api_client, url: str) -> int:
    with CaptureQueriesContext(connection) as ctx:
        response = api_client.get(url)
    assert response.status_code == 200
    return len(ctx.captured_queries)


class TestListQueryCount:
    def test_orders_list_is_constant(self, api_client, make_order, make_client):
        client = make_client()
        make_order(client=client)
        baseline = _query_count(api_client, "/pedidos")

        for _ in range(9):
            make_order(client=make_client())

        assert _query_count(api_client, "/pedidos") == baseline

    def test_deliveries_list_is_constant(self, api_client, make_order, make_delivery):
        order = make_order()
        make_delivery(order=order)
        baseline = _query_count(api_client, "/entregas")

        for _ in range(9):
            make_delivery(order=order)

        assert _query_count(api_client, "/entregas") == baseline

    def test_client_orders_is_constant(self, api_client, make_order, make_client):
        client = make_client()
        make_order(client=client)
        baseline = _query_count(api_client, f"/pedidos/cliente/{client.id}")

        for _ in range(9):
            make_order(client=client)

        assert _query_count(api_client, f"/pedidos/cliente/{client.id}") == baseline

"""Unit tests for delivery pricing.

Covers:
- compute_delivery_cost: every pricing step, per-step rounding, thresholds,
  costs too large for a cost column.
- PricingEngine.calculate: order lookup, delivery creation, errors.
"""

from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from modules.deliveries.constants import DeliveryStatus
from modules.deliveries.exceptions import DeliveryCostOutOfRange, MissingPricingInput
from modules.deliveries.pricing import PricingEngine, compute_delivery_cost, price_order
from modules.orders.exceptions import OrderNotFound

pytestmark = pytest.mark.unit


def _order(**overrides):
    defaults = {
        "id": "0190a000-0000-7000-8000-000000000001",
        "distance_km": Decimal("10"),
        "base_rate_per_km": Decimal("5"),
        "weight_kg": Decimal("5"),
        "base_rate_per_kg": Decimal("2"),
        "delivery_type": "standard",
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


# ===========================================================================
# compute_delivery_cost
# ===========================================================================


class TestComputeDeliveryCost:
    def test_standard_order(self):
        result = compute_delivery_cost(10, 5, 5, 2, "standard")

        assert result.distance_cost == Decimal("50.00")
        assert result.weight_cost == Decimal("10.00")
        assert result.base == Decimal("60.00")
        assert result.surcharge == Decimal("0.00")
        assert result.discount == Decimal("0.00")
        assert result.extra_fee == Decimal("0.00")
        assert result.final_cost == Decimal("60.00")

    def test_urgent_adds_twenty_percent(self):
        result = compute_delivery_cost(20, 5, 0, 1, "urgent")

        assert result.base == Decimal("100.00")
        assert result.surcharge == Decimal("20.00")
        assert result.final_cost == Decimal("120.00")

    def test_unknown_delivery_type_is_priced_as_standard(self):
        result = compute_delivery_cost(20, 5, 0, 1, "express")

        assert result.surcharge == Decimal("0.00")
        assert result.final_cost == Decimal("100.00")

    def test_urgent_heavy_order_without_discount(self):
        result = compute_delivery_cost(100, 3, 60, 1, "urgent")

        assert result.distance_cost == Decimal("300.00")
        assert result.weight_cost == Decimal("60.00")
        assert result.base == Decimal("360.00")
        assert result.surcharge == Decimal("72.00")
        assert result.discount == Decimal("0.00")
        assert result.extra_fee == Decimal("15.00")
        assert result.final_cost == Decimal("447.00")

    def test_discount_above_threshold(self):
        result = compute_delivery_cost(200, 3, 10, 1, "standard")

        assert result.base == Decimal("610.00")
        assert result.discount == Decimal("61.00")
        assert result.final_cost == Decimal("549.00")

    def test_no_discount_at_exact_threshold(self):
        result = compute_delivery_cost(100, 5, 0, 1, "standard")

        assert result.final_cost == Decimal("500.00")
        assert result.discount == Decimal("0.00")

    def test_discount_applies_after_surcharge(self):
        result = compute_delivery_cost(100, 5, 0, 1, "urgent")

        assert result.surcharge == Decimal("100.00")
        assert result.discount == Decimal("60.00")
        assert result.final_cost == Decimal("540.00")

    def test_heavy_weight_fee_added_after_discount(self):
        result = compute_delivery_cost(200, 3, 51, 1, "standard")

        assert result.base == Decimal("651.00")
        assert result.discount == Decimal("65.10")
        assert result.extra_fee == Decimal("15.00")
        assert result.final_cost == Decimal("600.90")

    def test_no_extra_fee_at_exact_weight_threshold(self):
        result = compute_delivery_cost(1, 1, 50, 1, "standard")

        assert result.extra_fee == Decimal("0.00")
        assert result.final_cost == Decimal("51.00")

    def test_each_step_is_rounded(self):
        # 0.004 + 0.004 would round to 0.01 if only the total were rounded
        result = compute_delivery_cost("0.004", "1", "0.004", "1", "standard")

        assert result.distance_cost == Decimal("0.00")
        assert result.weight_cost == Decimal("0.00")
        assert result.final_cost == Decimal("0.00")

    def test_half_cent_rounds_up(self):
        result = compute_delivery_cost("0.125", "1", 0, 1, "standard")

        assert result.distance_cost == Decimal("0.13")

    def test_floats_do_not_leak_binary_error(self):
        result = compute_delivery_cost(0.1, 3, 0, 1, "standard")

        assert result.distance_cost == Decimal("0.30")

    def test_negative_values_are_accepted(self):
        result = compute_delivery_cost(-10, 5, 0, 1, "standard")

        assert result.distance_cost == Decimal("-50.00")
        assert result.final_cost == Decimal("-50.00")

    def test_zero_inputs(self):
        result = compute_delivery_cost(0, 0, 0, 0, "urgent")

        assert result.final_cost == Decimal("0.00")

    @pytest.mark.parametrize(
        "field", ["distance_km", "base_rate_per_km", "weight_kg", "base_rate_per_kg"]
    )
    def test_missing_numeric_input_raises(self, field):
        kwargs = {
            "distance_km": 10,
            "base_rate_per_km": 5,
            "weight_kg": 5,
            "base_rate_per_kg": 2,
            "delivery_type": "standard",
        }
        kwargs[field] = None

        with pytest.raises(MissingPricingInput, match=field):
            compute_delivery_cost(**kwargs)

    def test_missing_delivery_type_raises(self):
        with pytest.raises(MissingPricingInput, match="delivery_type"):
            compute_delivery_cost(10, 5, 5, 2, None)

    def test_non_numeric_input_raises(self):
        with pytest.raises(MissingPricingInput, match="weight_kg"):
            compute_delivery_cost(10, 5, "heavy", 2, "standard")

    def test_cost_beyond_column_raises(self):
        with pytest.raises(DeliveryCostOutOfRange, match="distance_cost, final_cost"):
            compute_delivery_cost("999999999.999", "99999999.9999", 0, 1, "standard")

    def test_largest_storable_cost(self):
        result = compute_delivery_cost("9999999999.99", 1, 0, 1, "standard")

        assert result.distance_cost == Decimal("9999999999.99")
        assert result.final_cost == Decimal("8999999999.99")

    def test_overflowing_decimal_context_raises(self):
        with pytest.raises(DeliveryCostOutOfRange):
            compute_delivery_cost("1e30", "1e30", 0, 1, "standard")

    def test_costs_exclude_base(self):
        costs = compute_delivery_cost(10, 5, 5, 2, "standard").costs()

        assert "base" not in costs
        assert costs["final_cost"] == Decimal("60.00")

    def test_price_order_reads_order_fields(self):
        result = price_order(_order(delivery_type="urgent"))

        assert result.surcharge == Decimal("12.00")
        assert result.final_cost == Decimal("72.00")


# ===========================================================================
# PricingEngine
# ===========================================================================


@pytest.fixture()
def order_repo():
    return MagicMock()


@pytest.fixture()
def delivery_repo():
    repo = MagicMock()
    repo.create.side_effect = lambda order_id, costs, status: SimpleNamespace(
        id="0190a000-0000-7000-8000-0000000000d1",
        order_id=order_id,
        status=status,
        **costs,
    )
    return repo


@pytest.fixture()
def engine(order_repo, delivery_repo):
    return PricingEngine(order_repository=order_repo, delivery_repository=delivery_repo)


class TestPricingEngine:
    def test_creates_calculated_delivery(self, engine, order_repo, delivery_repo):
        order = _order()
        order_repo.get_for_update.return_value = order

        delivery = engine.calculate(order.id)

        order_repo.get_for_update.assert_called_once_with(order.id)
        delivery_repo.create.assert_called_once()
        kwargs = delivery_repo.create.call_args.kwargs
        assert kwargs["order_id"] == order.id
        assert kwargs["status"] == DeliveryStatus.CALCULATED
        assert kwargs["costs"]["final_cost"] == Decimal("60.00")
        assert delivery.status == DeliveryStatus.CALCULATED

    def test_order_not_found(self, engine, order_repo, delivery_repo):
        order_repo.get_for_update.return_value = None

        with pytest.raises(OrderNotFound):
            engine.calculate("0190a000-0000-7000-8000-000000000099")

        delivery_repo.create.assert_not_called()

    def test_missing_field_creates_nothing(self, engine, order_repo, delivery_repo):
        order_repo.get_for_update.return_value = _order(weight_kg=None)

        with pytest.raises(MissingPricingInput):
            engine.calculate("0190a000-0000-7000-8000-000000000001")

        delivery_repo.create.assert_not_called()

    def test_oversized_cost_creates_nothing(self, engine, order_repo, delivery_repo):
        order_repo.get_for_update.return_value = _order(
            distance_km=Decimal("999999999.999"),
            base_rate_per_km=Decimal("99999999.9999"),
            weight_kg=Decimal("999999999.999"),
        )

        with pytest.raises(DeliveryCostOutOfRange):
            engine.calculate("0190a000-0000-7000-8000-000000000001")

        delivery_repo.create.assert_not_called()

    def test_order_is_not_modified(self, engine, order_repo):
        order = _order()
        order_repo.get_for_update.return_value = order

        engine.calculate(order.id)

        order_repo.update.assert_not_called()
        order_repo.save.assert_not_called()

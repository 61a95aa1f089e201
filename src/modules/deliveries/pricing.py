"""Delivery pricing.

``compute_delivery_cost`` is the pure price formula; ``PricingEngine``
reads an order through the repository, prices it and records a new
delivery in status ``calculado``.

Each step is rounded to cents before it feeds the next one:

1. ``distance_cost = round2(distance_km * base_rate_per_km)``
2. ``weight_cost = round2(weight_kg * base_rate_per_kg)``
3. ``base = distance_cost + weight_cost``
4. urgent orders: ``surcharge = round2(base * 0.20)``
5. ``final_cost = round2(base + surcharge)``
6. ``final_cost > 500``: ``discount = round2(final_cost * 0.10)``,
   subtracted from ``final_cost``
7. ``weight_kg > 50``: ``extra_fee = 15.00``, added to ``final_cost``

Rounding only the final value gives different cents for some inputs.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Optional

import structlog
from django.db import transaction

from modules.core.money import ZERO, Number, fits_money_column, round2, to_decimal
from modules.deliveries.constants import (
    DISCOUNT_RATE,
    DISCOUNT_THRESHOLD,
    HEAVY_WEIGHT_FEE,
    HEAVY_WEIGHT_THRESHOLD_KG,
    URGENT_SURCHARGE_RATE,
    DeliveryStatus,
)
from modules.deliveries.dtos import CostBreakdown
from modules.deliveries.exceptions import DeliveryCostOutOfRange, MissingPricingInput
from modules.orders.constants import DeliveryType
from modules.orders.exceptions import OrderNotFound

if TYPE_CHECKING:
    from modules.deliveries.models import Delivery
    from modules.deliveries.repositories.interfaces import IDeliveryRepository
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


def _require(name: str, value: Optional[Number]) -> Decimal:
    if value is None:
        raise MissingPricingInput(f"Campo obrigatório ausente para o cálculo: {name}.")
    try:
        return to_decimal(value)
    except ValueError as exc:
        raise MissingPricingInput(f"Valor numérico inválido para {name}.") from exc


def compute_delivery_cost(
    distance_km: Optional[Number],
    base_rate_per_km: Optional[Number],
    weight_kg: Optional[Number],
    base_rate_per_kg: Optional[Number],
    delivery_type: Optional[str] = DeliveryType.STANDARD,
) -> CostBreakdown:
    """Price a delivery.

    Any ``delivery_type`` other than ``urgent`` is priced as standard.
    Negative and zero inputs are not rejected.

    Raises:
        MissingPricingInput: a numeric input is missing or not a number,
            or ``delivery_type`` is missing.
        DeliveryCostOutOfRange: a computed value does not fit a cost
            column (more than 10 integer digits).
    """
    distance = _require("distance_km", distance_km)
    rate_km = _require("base_rate_per_km", base_rate_per_km)
    weight = _require("weight_kg", weight_kg)
    rate_kg = _require("base_rate_per_kg", base_rate_per_kg)
    if delivery_type is None:
        raise MissingPricingInput("Campo obrigatório ausente para o cálculo: delivery_type.")

    try:
        distance_cost = round2(distance * rate_km)
        weight_cost = round2(weight * rate_kg)
        base = distance_cost + weight_cost

        surcharge = ZERO
        if delivery_type == DeliveryType.URGENT:
            surcharge = round2(base * URGENT_SURCHARGE_RATE)

        final_cost = round2(base + surcharge)

        discount = ZERO
        if final_cost > DISCOUNT_THRESHOLD:
            discount = round2(final_cost * DISCOUNT_RATE)
            final_cost = round2(final_cost - discount)

        extra_fee = ZERO
        if weight > HEAVY_WEIGHT_THRESHOLD_KG:
            extra_fee = HEAVY_WEIGHT_FEE
            final_cost = round2(final_cost + extra_fee)
    except InvalidOperation as exc:
        # quantize() fails once a value outgrows the decimal context
        raise DeliveryCostOutOfRange() from exc

    breakdown = CostBreakdown(
        distance_cost=distance_cost,
        weight_cost=weight_cost,
        base=base,
        surcharge=surcharge,
        discount=discount,
        extra_fee=extra_fee,
        final_cost=final_cost,
    )
    oversized = sorted(
        name for name, value in breakdown.costs().items() if not fits_money_column(value)
    )
    if oversized:
        raise DeliveryCostOutOfRange(
            f"Valor da entrega excede o limite permitido: {', '.join(oversized)}."
        )
    return breakdown


def price_order(order: Order | Any) -> CostBreakdown:
    """Apply ``compute_delivery_cost`` to an order's fields."""
    return compute_delivery_cost(
        distance_km=order.distance_km,
        base_rate_per_km=order.base_rate_per_km,
        weight_kg=order.weight_kg,
        base_rate_per_kg=order.base_rate_per_kg,
        delivery_type=order.delivery_type,
    )


class PricingEngine:
    """Prices orders and records the resulting deliveries."""

    def __init__(
        self,
        order_repository: IOrderRepository,
        delivery_repository: IDeliveryRepository,
    ) -> None:
        self._order_repo = order_repository
        self._delivery_repo = delivery_repository

    @transaction.atomic
    def calculate(self, order_id: str) -> Delivery:
        """Price the order and insert a new delivery in ``calculado``.

        The order row is locked for the duration, so it cannot be
        deleted while its delivery is being recorded.  The order itself
        is not modified.

        Raises:
            OrderNotFound: the order does not exist.
            MissingPricingInput: the order lacks a pricing field.
            DeliveryCostOutOfRange: the price does not fit a cost column.
        """
        log = logger.bind(order_id=str(order_id))

        order = self._order_repo.get_for_update(order_id)
        if not order:
            log.warning("delivery.order_missing")
            raise OrderNotFound()

        breakdown = price_order(order)
        delivery = self._delivery_repo.create(
            order_id=str(order.id),
            costs=breakdown.costs(),
            status=DeliveryStatus.CALCULATED,
        )
        log.info(
            "delivery.calculated",
            delivery_id=str(delivery.id),
            final_cost=str(breakdown.final_cost),
            urgent=breakdown.surcharge > ZERO,
        )
        return delivery

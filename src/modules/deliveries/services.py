"""Delivery service layer (Use Cases).

Thin orchestration over ``PricingEngine`` and ``DeliveryLifecycle`` plus
the read and patch use-cases.  Deliveries have no dependents, so deletion
is not guarded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.core.patch import merge_fields, snapshot
from modules.deliveries.constants import COST_FIELDS
from modules.deliveries.exceptions import DeliveryNotFound
from modules.deliveries.lifecycle import DeliveryLifecycle
from modules.deliveries.pricing import PricingEngine

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.deliveries.dtos import UpdateDeliveryDTO
    from modules.deliveries.models import Delivery
    from modules.deliveries.repositories.interfaces import IDeliveryRepository
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

PATCHABLE_FIELDS = COST_FIELDS + ("status",)


class DeliveryService:
    """Application service for Delivery use-cases."""

    def __init__(
        self,
        delivery_repository: IDeliveryRepository,
        order_repository: IOrderRepository,
    ) -> None:
        self._repo = delivery_repository
        self._pricing = PricingEngine(order_repository, delivery_repository)
        self._lifecycle = DeliveryLifecycle(delivery_repository)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def calculate(self, order_id: str) -> Delivery:
        """Price an order and record a new delivery (see ``PricingEngine``)."""
        return self._pricing.calculate(order_id)

    def set_status(self, delivery_id: str, new_status: Any) -> Delivery:
        """Change only the status (see ``DeliveryLifecycle``)."""
        return self._lifecycle.set_status(delivery_id, new_status)

    @transaction.atomic
    def update_delivery(self, delivery_id: str, dto: UpdateDeliveryDTO) -> Delivery:
        """Patch status and/or monetary values.

        A supplied status is validated before the delivery is looked up.
        Monetary values are stored rounded to cents and are not
        recomputed from the order.

        Raises:
            InvalidDeliveryStatus: unknown status.
            DeliveryNotFound: delivery does not exist.
        """
        changes = dto.changes()
        if "status" in changes:
            changes["status"] = DeliveryLifecycle.validate(changes["status"])

        delivery = self._repo.get_for_update(delivery_id)
        if not delivery:
            raise DeliveryNotFound()

        if not changes:
            return delivery

        merged = merge_fields(
            snapshot(delivery, PATCHABLE_FIELDS), changes, PATCHABLE_FIELDS
        )
        delivery = self._repo.update(delivery, merged)
        logger.info("delivery.patched", delivery_id=str(delivery_id), fields=sorted(changes))
        return delivery

    @transaction.atomic
    def delete_delivery(self, delivery_id: str) -> None:
        """Raises ``DeliveryNotFound`` when nothing was deleted."""
        if not self._repo.delete(delivery_id):
            raise DeliveryNotFound()
        logger.info("delivery.removed", delivery_id=str(delivery_id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_delivery(self, delivery_id: str) -> Delivery:
        delivery = self._repo.get_by_id(delivery_id)
        if not delivery:
            raise DeliveryNotFound()
        return delivery

    def list_deliveries(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> QuerySet[Delivery]:
        return self._repo.list(filters)

    def list_order_deliveries(self, order_id: str) -> QuerySet[Delivery]:
        """Deliveries of one order; empty when the order has none or does not exist."""
        return self._repo.list_by_order(order_id)

"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
Look-ups return ``None`` for missing or malformed IDs; the Service
Layer turns that into ``OrderNotFound``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.orders.models import Order
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create / Update
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        """Insert an order.

        ``data`` keys: ``client_id``, ``order_date``, ``delivery_type``,
        ``weight_kg``, ``distance_km``, ``base_rate_per_km``,
        ``base_rate_per_kg``.
        """
        order = Order(**data)
        order.save()
        logger.info("order.inserted", order_id=str(order.id), client_id=str(order.client_id))
        return order

    @transaction.atomic
    def update(self, entity: Order, data: Dict[str, Any]) -> Order:
        """Assign ``data`` and persist only the touched columns."""
        for field, value in data.items():
            setattr(entity, field, value)
        entity.save(update_fields=[_column_field(name) for name in data])
        logger.info("order.updated", order_id=str(entity.id), fields=sorted(data))
        return entity

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist (create or update) an order."""
        entity.save()
        logger.info("order.saved", order_id=str(entity.id))
        return entity

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its client (single JOIN).

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Order.objects.select_related("client").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE).

        Delivery creation and order deletion both take this lock.
        """
        try:
            return Order.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Order]:
        """List orders with optional filters.

        Supported filter keys include ``client_id``, ``delivery_type``
        and ``order_date__range``.
        """
        queryset = Order.objects.select_related("client")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def count_by_client(self, client_id: str) -> int:
        try:
            return Order.objects.filter(client_id=client_id).count()
        except (ValueError, ValidationError):
            return 0

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Hard-delete an order by ID."""
        deleted, _ = Order.objects.filter(id=id).delete()
        if deleted:
            logger.info("order.deleted", order_id=str(id))
        return bool(deleted)


def _column_field(name: str) -> str:
    """``update_fields`` wants the relation name, not ``<fk>_id``."""
    return "client" if name == "client_id" else name

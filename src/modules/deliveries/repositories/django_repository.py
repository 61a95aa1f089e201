"""Django ORM implementation of the Delivery repository."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.deliveries.models import Delivery
from modules.deliveries.repositories.interfaces import IDeliveryRepository

logger = structlog.get_logger(__name__)


class DeliveryDjangoRepository(IDeliveryRepository):
    """Concrete Delivery repository backed by Django ORM."""

    @transaction.atomic
    def create(self, order_id: str, costs: Dict[str, Decimal], status: str) -> Delivery:
        delivery = Delivery(order_id=order_id, status=status, **costs)
        delivery.save()
        logger.info(
            "delivery.inserted", delivery_id=str(delivery.id), order_id=str(order_id)
        )
        return delivery

    @transaction.atomic
    def update(self, entity: Delivery, data: Dict[str, Any]) -> Delivery:
        """Assign ``data`` and persist only the touched columns."""
        for field, value in data.items():
            setattr(entity, field, value)
        entity.save(update_fields=list(data))
        logger.info("delivery.updated", delivery_id=str(entity.id), fields=sorted(data))
        return entity

    @transaction.atomic
    def save(self, entity: Delivery) -> Delivery:
        entity.save()
        logger.info("delivery.saved", delivery_id=str(entity.id))
        return entity

    def get_by_id(self, id: str) -> Optional[Delivery]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return Delivery.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Delivery]:
        try:
            return Delivery.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Delivery]:
        queryset = Delivery.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def list_by_order(self, order_id: str) -> models.QuerySet[Delivery]:
        return Delivery.objects.filter(order_id=order_id)

    def count_by_order(self, order_id: str) -> int:
        try:
            return Delivery.objects.filter(order_id=order_id).count()
        except (ValueError, ValidationError):
            return 0

    @transaction.atomic
    def delete(self, id: str) -> bool:
        deleted, _ = Delivery.objects.filter(id=id).delete()
        if deleted:
            logger.info("delivery.deleted", delivery_id=str(id))
        return bool(deleted)

"""Delivery status lifecycle.

Statuses: ``calculado`` (initial), ``em_transito``, ``entregue``,
``cancelado``.  Any status may follow any other, including moving a
delivered one back to ``calculado``; only membership in the enum is
checked.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from django.db import transaction

from modules.deliveries.constants import DeliveryStatus
from modules.deliveries.exceptions import DeliveryNotFound, InvalidDeliveryStatus

if TYPE_CHECKING:
    from modules.deliveries.models import Delivery
    from modules.deliveries.repositories.interfaces import IDeliveryRepository

logger = structlog.get_logger(__name__)


class DeliveryLifecycle:
    """Validates and applies status changes on existing deliveries."""

    def __init__(self, repository: IDeliveryRepository) -> None:
        self._repo = repository

    @staticmethod
    def validate(new_status: Any) -> DeliveryStatus:
        """Return the matching ``DeliveryStatus`` or raise ``InvalidDeliveryStatus``."""
        if new_status not in DeliveryStatus.values:
            raise InvalidDeliveryStatus()
        return DeliveryStatus(new_status)

    @transaction.atomic
    def set_status(self, delivery_id: str, new_status: Any) -> Delivery:
        """Move a delivery to *new_status*.

        Setting the status it already has is a no-op (no write).

        Raises:
            InvalidDeliveryStatus: *new_status* is not a known status.
            DeliveryNotFound: the delivery does not exist.
        """
        status = self.validate(new_status)

        delivery = self._repo.get_for_update(delivery_id)
        if not delivery:
            raise DeliveryNotFound()

        log = logger.bind(
            delivery_id=str(delivery_id),
            current_status=delivery.status,
            new_status=str(status),
        )
        if delivery.status == status:
            log.info("delivery.status_unchanged")
            return delivery

        delivery = self._repo.update(delivery, {"status": status})
        log.info("delivery.status_updated")
        return delivery

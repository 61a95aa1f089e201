"""Delivery repository interface.

Adds the per-order queries used by the pricing engine, the delivery
listing by order and the referential guard.
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.deliveries.models import Delivery


class IDeliveryRepository(IRepository["Delivery"]):
    """Repository contract for deliveries."""

    @abstractmethod
    def create(self, order_id: str, costs: Dict[str, Decimal], status: str) -> Delivery:
        """Insert a delivery for *order_id* with the given cost breakdown."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Delivery]:
        """List deliveries with optional filters."""

    @abstractmethod
    def list_by_order(self, order_id: str) -> QuerySet[Delivery]:
        """Deliveries of one order, newest first."""

    @abstractmethod
    def count_by_order(self, order_id: str) -> int:
        """Number of deliveries whose ``order_id`` equals *order_id*."""

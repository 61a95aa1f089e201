"""Order repository interface.

Extends ``IRepository[Order]`` with the foreign-key count the
referential guard needs before a client can be deleted.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Insert an order from validated field values."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Order]:
        """List orders with optional filters."""

    @abstractmethod
    def count_by_client(self, client_id: str) -> int:
        """Number of orders whose ``client_id`` equals *client_id*."""

"""Referential guard for Client and Order deletion.

A Client may only be deleted while no Order references it, and an Order
while no Delivery references it.  The guard is a pure read: it counts
dependents and raises ``DependentsExist`` when the count is non-zero.

Callers run *lock parent row -> ensure_deletable -> delete* inside one
``transaction.atomic`` block.  Child creation locks the same parent row,
so no dependent can appear between the count and the delete.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING
from uuid import UUID

import structlog

from modules.core.exceptions import IntegrityError

if TYPE_CHECKING:
    from modules.deliveries.repositories.interfaces import IDeliveryRepository
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class EntityKind(StrEnum):
    CLIENT = "client"
    ORDER = "order"


_MESSAGES = {
    EntityKind.CLIENT: "Não é possível excluir o cliente: existem {count} pedido(s) vinculado(s).",
    EntityKind.ORDER: "Não é possível excluir o pedido: existem {count} entrega(s) vinculada(s).",
}


class DependentsExist(IntegrityError):
    """Deletion blocked: the entity still has dependent records."""

    def __init__(self, entity_kind: EntityKind, id: UUID | str, count: int) -> None:
        self.entity_kind = entity_kind
        self.entity_id = str(id)
        super().__init__(_MESSAGES[entity_kind].format(count=count), dependents=count)


class ReferentialGuard:
    """Counts dependents through the injected repositories."""

    def __init__(
        self,
        order_repository: IOrderRepository,
        delivery_repository: IDeliveryRepository,
    ) -> None:
        self._order_repo = order_repository
        self._delivery_repo = delivery_repository

    def count_dependents(self, entity_kind: EntityKind | str, id: UUID | str) -> int:
        """Orders of a Client, or Deliveries of an Order."""
        kind = EntityKind(entity_kind)
        if kind is EntityKind.CLIENT:
            return self._order_repo.count_by_client(str(id))
        return self._delivery_repo.count_by_order(str(id))

    def ensure_deletable(self, entity_kind: EntityKind | str, id: UUID | str) -> None:
        """Raise ``DependentsExist`` if anything still references the entity."""
        kind = EntityKind(entity_kind)
        count = self.count_dependents(kind, id)
        if count > 0:
            logger.warning(
                "guard.deletion_blocked",
                entity_kind=str(kind),
                entity_id=str(id),
                dependents=count,
            )
            raise DependentsExist(kind, id, count)

"""Order service layer (Use Cases).

Orchestrates order creation, patch updates, and guarded deletion.
All write operations are atomic; the service defines the
unit-of-work boundary.

Business rules enforced:
- RN-PED-001: Referenced client must exist (creation and client change).
- RN-PED-003: Deletion refused while deliveries reference the order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.clients.exceptions import ClientNotFound
from modules.core.guards import EntityKind
from modules.core.patch import merge_fields, snapshot
from modules.orders.dtos import ORDER_FIELDS
from modules.orders.exceptions import OrderNotFound

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.clients.repositories.interfaces import IClientRepository
    from modules.core.guards import ReferentialGuard
    from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories and the referential guard via constructor
    injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        client_repository: IClientRepository,
        guard: ReferentialGuard,
    ) -> None:
        self._order_repo = order_repository
        self._client_repo = client_repository
        self._guard = guard

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create an order for an existing client.

        The client row is locked so a concurrent client deletion cannot
        slip between the existence check and the insert.

        Raises:
            ClientNotFound: the referenced client does not exist.
        """
        log = logger.bind(client_id=str(dto.client_id))

        client = self._client_repo.get_for_update(str(dto.client_id))
        if not client:
            log.warning("order.client_missing")
            raise ClientNotFound()

        order = self._order_repo.create(dto.model_dump())
        log.info("order.created", order_id=str(order.id), delivery_type=order.delivery_type)
        return order

    @transaction.atomic
    def update_order(self, order_id: str, dto: UpdateOrderDTO) -> Order:
        """Patch an order with the supplied fields.

        Existing deliveries are not repriced.

        Raises:
            OrderNotFound: order does not exist.
            ClientNotFound: a new ``client_id`` does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound()

        log = logger.bind(order_id=str(order_id))
        changes = dto.changes()

        new_client_id = changes.get("client_id")
        if new_client_id is not None and new_client_id != order.client_id:
            if not self._client_repo.get_for_update(str(new_client_id)):
                log.warning("order.client_missing", client_id=str(new_client_id))
                raise ClientNotFound()

        merged = merge_fields(snapshot(order, ORDER_FIELDS), changes, ORDER_FIELDS)
        order = self._order_repo.update(order, merged)
        log.info("order.patched", fields=sorted(changes))
        return order

    @transaction.atomic
    def delete_order(self, order_id: str) -> None:
        """Delete an order that no delivery references (RN-PED-003).

        Raises:
            OrderNotFound: order does not exist.
            DependentsExist: deliveries still reference the order.
        """
        order = self._order_repo.get_for_update(order_id)
        if not order:
            raise OrderNotFound()
        self._guard.ensure_deletable(EntityKind.ORDER, order.id)
        self._order_repo.delete(str(order.id))
        logger.info("order.removed", order_id=str(order_id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound()
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Order]:
        """Return orders, optionally filtered."""
        return self._order_repo.list(filters)

    def list_client_orders(self, client_id: str) -> QuerySet[Order]:
        """Orders of one client.

        Raises:
            ClientNotFound: if the client does not exist.
        """
        if not self._client_repo.get_by_id(client_id):
            raise ClientNotFound()
        return self._order_repo.list({"client_id": client_id})

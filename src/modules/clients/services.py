"""Client service layer (Use Cases).

Orchestrates business logic for the Client aggregate, delegating
persistence to the injected ``IClientRepository``.

Business rules enforced here:
- RN-CLI-001: CPF must be unique (pre-insert existence check, backed by
  the unique index for concurrent inserts).
- RN-CLI-003: Deletion refused while orders reference the client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import IntegrityError as DatabaseIntegrityError
from django.db import transaction

from modules.clients.dtos import CLIENT_FIELDS
from modules.clients.exceptions import ClientAlreadyExists, ClientNotFound
from modules.clients.models import Client
from modules.core.guards import EntityKind
from modules.core.patch import merge_fields, snapshot

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.clients.dtos import CreateClientDTO, UpdateClientDTO
    from modules.clients.repositories.interfaces import IClientRepository
    from modules.core.guards import ReferentialGuard

logger = structlog.get_logger(__name__)


class ClientService:
    """Application service for Client use-cases.

    Receives the repository and the referential guard via constructor
    injection (DIP).
    """

    def __init__(self, repository: IClientRepository, guard: ReferentialGuard) -> None:
        self._repo = repository
        self._guard = guard

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_client(self, dto: CreateClientDTO) -> Client:
        """Create a new client after enforcing CPF uniqueness.

        Raises:
            ClientAlreadyExists: if the CPF is already registered (RN-CLI-001).
        """
        if self._repo.get_by_national_id(dto.national_id):
            logger.warning("client.duplicate_national_id")
            raise ClientAlreadyExists()

        try:
            client = self._repo.save(Client(**dto.model_dump()))
        except DatabaseIntegrityError as exc:
            # national_id is the only unique column
            logger.warning("client.duplicate_national_id", source="database")
            raise ClientAlreadyExists() from exc
        logger.info("client.created", client_id=str(client.id))
        return client

    @transaction.atomic
    def update_client(self, id: str, dto: UpdateClientDTO) -> Client:
        """Patch an existing client with the supplied fields.

        Raises:
            ClientNotFound: if the client does not exist.
            ClientAlreadyExists: if the new CPF belongs to another client.
        """
        client = self._repo.get_by_id(id)
        if not client:
            raise ClientNotFound()

        log = logger.bind(client_id=str(id))
        changes = dto.changes()

        new_national_id = changes.get("national_id")
        if new_national_id is not None and new_national_id != client.national_id:
            if self._repo.get_by_national_id(new_national_id):
                log.warning("client.duplicate_national_id")
                raise ClientAlreadyExists()

        merged = merge_fields(snapshot(client, CLIENT_FIELDS), changes, CLIENT_FIELDS)
        try:
            client = self._repo.update(client, merged)
        except DatabaseIntegrityError as exc:
            log.warning("client.duplicate_national_id", source="database")
            raise ClientAlreadyExists() from exc
        log.info("client.patched", fields=sorted(changes))
        return client

    @transaction.atomic
    def delete_client(self, id: str) -> None:
        """Delete a client that no order references (RN-CLI-003).

        The client row is locked before counting so no order can be
        attached between the check and the delete.

        Raises:
            ClientNotFound: if the client does not exist.
            DependentsExist: if orders still reference the client.
        """
        client = self._repo.get_for_update(id)
        if not client:
            raise ClientNotFound()
        self._guard.ensure_deletable(EntityKind.CLIENT, client.id)
        self._repo.delete(str(client.id))
        logger.info("client.removed", client_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_clients(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Client]:
        """Return clients, optionally filtered."""
        return self._repo.list(filters)

    def get_client(self, id: str) -> Client:
        """Retrieve a single client by ID.

        Raises:
            ClientNotFound: if the client does not exist.
        """
        client = self._repo.get_by_id(id)
        if not client:
            raise ClientNotFound()
        return client

    def get_client_by_national_id(self, national_id: str) -> Client:
        """Retrieve a client by CPF.

        Raises:
            ClientNotFound: if no client has that CPF.
        """
        client = self._repo.get_by_national_id(national_id.strip())
        if not client:
            raise ClientNotFound()
        return client

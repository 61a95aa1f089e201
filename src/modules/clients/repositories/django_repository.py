"""Django ORM implementation of the Client repository.

Satisfies ``IClientRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising; the Service Layer decides how to translate a
missing entity into a domain error.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.clients.models import Client
from modules.clients.repositories.interfaces import IClientRepository

logger = structlog.get_logger(__name__)


class ClientDjangoRepository(IClientRepository):
    """Concrete Client repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Client]:
        """Retrieve a client by primary key.

        Returns ``None`` for non-existent or invalid IDs (e.g. malformed UUID).
        """
        try:
            return Client.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Client]:
        """Retrieve a client with a row-level lock (SELECT FOR UPDATE).

        Must run inside ``transaction.atomic``.  Order creation and client
        deletion both take this lock, which serialises them.
        """
        try:
            return Client.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Client]:
        """List clients with optional Django ORM look-ups.

        Examples of valid filters::

            {"city__iexact": "Campinas"}
            {"state": "SP"}
        """
        queryset = Client.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Client) -> Client:
        """Persist (create or update) a client."""
        is_new = entity._state.adding
        entity.save()
        logger.info("client.saved", client_id=str(entity.id), is_new=is_new)
        return entity

    @transaction.atomic
    def update(self, entity: Client, data: Dict[str, Any]) -> Client:
        """Assign ``data`` and persist only the touched columns."""
        for field, value in data.items():
            setattr(entity, field, value)
        entity.save(update_fields=list(data))
        logger.info("client.updated", client_id=str(entity.id), fields=sorted(data))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Hard-delete a client by ID.

        Returns ``True`` if a row was removed, ``False`` otherwise.
        """
        deleted, _ = Client.objects.filter(id=id).delete()
        if deleted:
            logger.info("client.deleted", client_id=str(id))
        return bool(deleted)

    def get_by_national_id(self, national_id: str) -> Optional[Client]:
        """Retrieve a client by CPF."""
        return Client.objects.filter(national_id=national_id).first()

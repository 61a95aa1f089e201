"""Client domain exceptions.

Raised by the Service Layer when business rules are violated.
``api_exception_handler`` translates them into HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import ConflictError, NotFoundError


class ClientAlreadyExists(ConflictError):
    """A client with the same CPF already exists (RN-CLI-001)."""

    default_message = "Esse CPF já existe."


class ClientNotFound(NotFoundError):
    """The requested client does not exist."""

    default_message = "Cliente não encontrado."

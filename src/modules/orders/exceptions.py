"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
``api_exception_handler`` translates them into HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import NotFoundError


class OrderNotFound(NotFoundError):
    """The requested order does not exist."""

    default_message = "Pedido não encontrado."

"""Request helpers shared by the API views."""

from __future__ import annotations

from typing import Any, Dict
from uuid import UUID

from rest_framework.request import Request

from modules.core.exceptions import InvalidIdentifier


def parse_id(value: Any) -> UUID:
    """Parse a path/body identifier, raising ``InvalidIdentifier`` (400)."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidIdentifier() from exc


def request_payload(request: Request) -> Dict[str, Any]:
    """Return the request body as a plain ``dict``."""
    data = request.data
    if hasattr(data, "dict"):
        return data.dict()
    if isinstance(data, dict):
        return dict(data)
    return {}

"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``CreateOrderDTO``: input for order creation; every field required.
- ``UpdateOrderDTO``: patch input; only supplied fields are applied.

Numeric fields are ``Decimal`` (JSON floats are converted through their
string form).  Negative and zero values are accepted.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from modules.core.patch import PatchDTO
from modules.orders.constants import DELIVERY_TYPE_MAX_LENGTH

DeliveryTypeStr = Annotated[
    str, StringConstraints(min_length=1, max_length=DELIVERY_TYPE_MAX_LENGTH)
]
Measure = Annotated[Decimal, Field(max_digits=12, decimal_places=3)]
Rate = Annotated[Decimal, Field(max_digits=12, decimal_places=4)]

ORDER_FIELDS = (
    "client_id",
    "order_date",
    "delivery_type",
    "weight_kg",
    "distance_km",
    "base_rate_per_km",
    "base_rate_per_kg",
)


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    client_id: UUID
    order_date: date
    delivery_type: DeliveryTypeStr
    weight_kg: Measure
    distance_km: Measure
    base_rate_per_km: Rate
    base_rate_per_kg: Rate


class UpdateOrderDTO(PatchDTO):
    """Patch DTO for order updates.

    If ``client_id`` is supplied the service checks that it exists.
    """

    client_id: Optional[UUID] = None
    order_date: Optional[date] = None
    delivery_type: Optional[DeliveryTypeStr] = None
    weight_kg: Optional[Measure] = None
    distance_km: Optional[Measure] = None
    base_rate_per_km: Optional[Rate] = None
    base_rate_per_kg: Optional[Rate] = None

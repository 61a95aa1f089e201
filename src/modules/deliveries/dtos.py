"""Delivery DTOs.

- ``CostBreakdown``: output of the pure price computation.
- ``CalculateDeliveryDTO``: input of ``POST /entregas/calcular``.
- ``SetStatusDTO``: input of a status change.
- ``UpdateDeliveryDTO``: patch input (status and/or monetary values).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.core.money import MONEY_INTEGER_DIGITS, fits_money_column, round2
from modules.core.patch import PatchDTO
from modules.deliveries.constants import COST_FIELDS


class CostBreakdown(BaseModel):
    """Every monetary step of a delivery price, each rounded to cents.

    ``base`` is ``distance_cost + weight_cost``; it is reported but not
    stored on the delivery.
    """

    model_config = ConfigDict(frozen=True)

    distance_cost: Decimal
    weight_cost: Decimal
    base: Decimal
    surcharge: Decimal
    discount: Decimal
    extra_fee: Decimal
    final_cost: Decimal

    def costs(self) -> Dict[str, Decimal]:
        """The six values persisted on a ``Delivery``."""
        return {field: getattr(self, field) for field in COST_FIELDS}


class CalculateDeliveryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: UUID


class SetStatusDTO(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    status: str


class UpdateDeliveryDTO(PatchDTO):
    """Patch DTO for deliveries.

    Monetary values are rounded to cents and stored as given; nothing
    is recomputed from the order.
    """

    status: Optional[str] = None
    distance_cost: Optional[Decimal] = None
    weight_cost: Optional[Decimal] = None
    surcharge: Optional[Decimal] = None
    discount: Optional[Decimal] = None
    extra_fee: Optional[Decimal] = None
    final_cost: Optional[Decimal] = None

    @field_validator(*COST_FIELDS)
    @classmethod
    def money_must_fit_column(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        # Cost columns are DECIMAL(12, 2)
        if v is None:
            return v
        if fits_money_column(v):
            rounded = round2(v)
            if fits_money_column(rounded):
                return rounded
        raise ValueError(f"no máximo {MONEY_INTEGER_DIGITS} dígitos inteiros")

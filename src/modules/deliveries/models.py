"""Delivery model.

Business rules implemented:
- RN-ENT-001: Deliveries are created only by the pricing engine, in
  status ``calculado``.
- RN-ENT-002: Recalculating an order inserts a new delivery; existing
  deliveries are never overwritten.
- RN-ENT-003: Monetary values carry exactly 2 decimal places.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from modules.core.models import BaseModel
from modules.deliveries.constants import DeliveryStatus


def _money(**kwargs) -> models.DecimalField:
    return models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00"), **kwargs
    )


class Delivery(BaseModel):
    """Priced, status-tracked execution record of an order."""

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.PROTECT,
        related_name="deliveries",
    )
    distance_cost: models.DecimalField = _money()
    weight_cost: models.DecimalField = _money()
    surcharge: models.DecimalField = _money()
    discount: models.DecimalField = _money()
    extra_fee: models.DecimalField = _money()
    final_cost: models.DecimalField = _money()
    status: models.CharField = models.CharField(
        max_length=20,
        choices=DeliveryStatus.choices,
        default=DeliveryStatus.CALCULATED,
    )

    class Meta:
        db_table = "deliveries"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="deliveries_status_idx"),
            models.Index(fields=["-created_at"], name="deliveries_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Entrega {self.id} ({self.status}, R$ {self.final_cost})"

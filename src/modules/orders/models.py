"""Order model.

Business rules implemented:
- RN-PED-001: An order references an existing client (checked at service
  layer; ``PROTECT`` keeps the client row while orders exist).
- RN-PED-002: ``delivery_type`` is ``standard`` or ``urgent``; any other
  stored value is priced as ``standard``.
- RN-PED-003: An order with deliveries cannot be deleted (``ReferentialGuard``
  at service layer, ``PROTECT`` on ``Delivery.order`` at database level).
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import DELIVERY_TYPE_MAX_LENGTH, DeliveryType


class Order(BaseModel):
    """Shipment request: what to carry, how far, and at which rates."""

    client: models.ForeignKey = models.ForeignKey(
        "clients.Client",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    order_date: models.DateField = models.DateField()
    delivery_type: models.CharField = models.CharField(
        max_length=DELIVERY_TYPE_MAX_LENGTH,
        choices=DeliveryType.choices,
        default=DeliveryType.STANDARD,
    )
    weight_kg: models.DecimalField = models.DecimalField(max_digits=12, decimal_places=3)
    distance_km: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=3
    )
    base_rate_per_km: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=4
    )
    base_rate_per_kg: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=4
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="orders_created_idx"),
            models.Index(fields=["order_date"], name="orders_date_idx"),
        ]

    @property
    def is_urgent(self) -> bool:
        return self.delivery_type == DeliveryType.URGENT

    def __str__(self) -> str:
        return f"Pedido {self.id} ({self.delivery_type}, {self.order_date})"

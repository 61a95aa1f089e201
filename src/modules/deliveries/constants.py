"""Delivery domain constants.

Status choices and the pricing parameters used by ``pricing.py``.
Status changes are unrestricted: any status may follow any other.
"""

from decimal import Decimal

from django.db import models


class DeliveryStatus(models.TextChoices):
    CALCULATED = "calculado", "Calculado"
    IN_TRANSIT = "em_transito", "Em trânsito"
    DELIVERED = "entregue", "Entregue"
    CANCELLED = "cancelado", "Cancelado"


URGENT_SURCHARGE_RATE = Decimal("0.20")

DISCOUNT_THRESHOLD = Decimal("500")
DISCOUNT_RATE = Decimal("0.10")

HEAVY_WEIGHT_THRESHOLD_KG = Decimal("50")
HEAVY_WEIGHT_FEE = Decimal("15.00")

COST_FIELDS = (
    "distance_cost",
    "weight_cost",
    "surcharge",
    "discount",
    "extra_fee",
    "final_cost",
)

"""Order domain constants."""

from django.db import models


class DeliveryType(models.TextChoices):
    STANDARD = "standard", "Padrão"
    URGENT = "urgent", "Urgente"


# Any stored value other than ``urgent`` is priced as ``standard``.
DELIVERY_TYPE_MAX_LENGTH = 20

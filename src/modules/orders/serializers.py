"""Order DRF serializers for API output.

Request bodies are validated by the Pydantic DTOs in ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders."""

    client_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "client_id",
            "order_date",
            "delivery_type",
            "weight_kg",
            "distance_km",
            "base_rate_per_km",
            "base_rate_per_kg",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

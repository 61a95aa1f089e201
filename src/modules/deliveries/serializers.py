"""Delivery DRF serializers for API output."""

from __future__ import annotations

from rest_framework import serializers

from modules.deliveries.models import Delivery


class DeliverySerializer(serializers.ModelSerializer):
    """Read serializer for deliveries."""

    order_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Delivery
        fields = [
            "id",
            "order_id",
            "distance_cost",
            "weight_cost",
            "surcharge",
            "discount",
            "extra_fee",
            "final_cost",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


"""Client DRF serializers for API output.

Request bodies are validated by the Pydantic DTOs in ``dtos.py``;
these serializers only render ``Client`` instances.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.clients.models import Client


class ClientSerializer(serializers.ModelSerializer):
    """Read serializer for the Client resource."""

    class Meta:
        model = Client
        fields = [
            "id",
            "name",
            "surname",
            "national_id",
            "phone",
            "email",
            "street_type",
            "street",
            "number",
            "district",
            "city",
            "state",
            "postal_code",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

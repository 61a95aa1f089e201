"""Client model.

Business rules implemented:
- RN-CLI-001: ``national_id`` (CPF, 11 characters) is unique in the system.
- RN-CLI-002: ``state`` has exactly 2 characters, ``postal_code`` exactly 8
  (validated by ``CreateClientDTO`` / ``UpdateClientDTO``).
- RN-CLI-003: A client with orders cannot be deleted (``ReferentialGuard``
  at service layer, ``PROTECT`` on ``Order.client`` at database level).
- RN-CLI-004: ``national_id`` masked in ``__str__`` and logs.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel

NATIONAL_ID_LENGTH = 11
STATE_LENGTH = 2
POSTAL_CODE_LENGTH = 8


class Client(BaseModel):
    """Client aggregate root: the person who places orders."""

    name = models.CharField(max_length=100)
    surname = models.CharField(max_length=150)
    national_id = models.CharField(max_length=NATIONAL_ID_LENGTH, unique=True)
    phone = models.CharField(max_length=20)
    email = models.EmailField(max_length=254)
    street_type = models.CharField(max_length=30)
    street = models.CharField(max_length=150)
    number = models.CharField(max_length=10)
    district = models.CharField(max_length=100)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=STATE_LENGTH)
    postal_code = models.CharField(max_length=POSTAL_CODE_LENGTH)

    class Meta:
        db_table = "clients"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="clients_created_idx"),
            models.Index(fields=["city", "state"], name="clients_city_state_idx"),
        ]

    def __str__(self) -> str:
        suffix = self.national_id[-4:] if self.national_id else "????"
        return f"{self.name} {self.surname} (CPF: ***{suffix})"

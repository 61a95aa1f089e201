"""Client DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the
Service layer.  DTOs are immutable (``frozen=True``) and strip
surrounding whitespace from every string before validating it.

- ``CreateClientDTO``: input for client creation; every field required.
- ``UpdateClientDTO``: patch input; only supplied fields are applied.
"""

from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, StringConstraints

from modules.clients.models import NATIONAL_ID_LENGTH, POSTAL_CODE_LENGTH, STATE_LENGTH
from modules.core.patch import PatchDTO

NonEmpty = Annotated[str, StringConstraints(min_length=1)]
NationalId = Annotated[
    str,
    StringConstraints(min_length=NATIONAL_ID_LENGTH, max_length=NATIONAL_ID_LENGTH),
]
StateCode = Annotated[
    str, StringConstraints(min_length=STATE_LENGTH, max_length=STATE_LENGTH)
]
PostalCode = Annotated[
    str,
    StringConstraints(min_length=POSTAL_CODE_LENGTH, max_length=POSTAL_CODE_LENGTH),
]

CLIENT_FIELDS = (
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
)


class CreateClientDTO(BaseModel):
    """Immutable DTO for client creation requests.

    Validates:
    - every field is a non-empty string (numbers are not coerced);
    - ``national_id`` has exactly 11 characters;
    - ``state`` has exactly 2 characters;
    - ``postal_code`` has exactly 8 characters;
    - ``email`` is a well-formed address.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: NonEmpty
    surname: NonEmpty
    national_id: NationalId
    phone: NonEmpty
    email: EmailStr
    street_type: NonEmpty
    street: NonEmpty
    number: NonEmpty
    district: NonEmpty
    city: NonEmpty
    state: StateCode
    postal_code: PostalCode


class UpdateClientDTO(PatchDTO):
    """Patch DTO for client updates.

    Omitted fields keep their stored value; supplied fields follow the
    same rules as creation.
    """

    name: Optional[NonEmpty] = None
    surname: Optional[NonEmpty] = None
    national_id: Optional[NationalId] = None
    phone: Optional[NonEmpty] = None
    email: Optional[EmailStr] = None
    street_type: Optional[NonEmpty] = None
    street: Optional[NonEmpty] = None
    number: Optional[NonEmpty] = None
    district: Optional[NonEmpty] = None
    city: Optional[NonEmpty] = None
    state: Optional[StateCode] = None
    postal_code: Optional[PostalCode] = None

"""Patch-merge support for update requests.

A field counts as *supplied* when its key was present in the request,
even if the value is falsy.  Supplied ``null`` on a required field is
rejected by ``PatchDTO``.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Iterable, Mapping, Self

from pydantic import BaseModel, ConfigDict, model_validator


def merge_fields(
    current: Mapping[str, Any],
    incoming: Mapping[str, Any],
    fields: Iterable[str],
) -> Dict[str, Any]:
    """Return ``fields`` taken from *incoming* when supplied, else from *current*."""
    return {f: incoming[f] if f in incoming else current[f] for f in fields}


def snapshot(entity: Any, fields: Iterable[str]) -> Dict[str, Any]:
    """Read the current value of each field from a model instance."""
    return {f: getattr(entity, f) for f in fields}


class PatchDTO(BaseModel):
    """Base for update DTOs: every field optional, ``null`` only where allowed."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_supplied_nulls(self) -> Self:
        nulls = sorted(
            f
            for f in self.model_fields_set
            if getattr(self, f) is None and f not in self.nullable_fields
        )
        if nulls:
            raise ValueError(f"Campos não podem ser nulos: {', '.join(nulls)}.")
        return self

    def changes(self) -> Dict[str, Any]:
        """Only the fields that were present in the request."""
        return self.model_dump(include=self.model_fields_set)

"""
Verification result models.

``Results`` is built once at the end of a ``verify`` call and never
changes afterwards; ``fields`` is a read-only mapping.  Every lookup on
a field name that was not part of the profile returns ``None`` instead
of raising, so callers working with dynamic profiles do not need to
guard each access.

Serialization:
    ``FieldResult.value`` holds the final (possibly coerced) value and is
    excluded from every dump, since coerced values can be arbitrary
    runtime objects.  Everything else is plain data, so
    ``Results.thaw(results.freeze())`` rebuilds an equivalent read-only
    view without re-running verification.

Usage::

    results = verifier.verify({"email": " a@b.c "})
    if not results.success:
        for name in results.invalids():
            print(name, results.get_reason(name))
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    SerializationInfo,
    field_serializer,
    field_validator,
)

from dataverifier.types import FieldStatus


class FieldResult(BaseModel):
    """Outcome of verifying a single field."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    value: Any = Field(None, exclude=True)
    original_value: Any = None
    post_filter_value: Any = None
    valid: bool = False
    set: bool = False
    required: bool = False
    reason: Optional[str] = None

    @property
    def status(self) -> FieldStatus:
        if self.valid:
            return FieldStatus.VALID
        # A required field that never arrived is invalid, not just missing
        if self.set or self.required:
            return FieldStatus.INVALID
        return FieldStatus.MISSING


class Results(BaseModel):
    """Aggregated outcome of one verification, flattened across dependents."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    fields: Mapping[str, FieldResult] = Field(default_factory=dict, validate_default=True)

    _valid_count: int = PrivateAttr(0)
    _invalid_count: int = PrivateAttr(0)
    _missing_count: int = PrivateAttr(0)

    @field_validator("fields", mode="after")
    @classmethod
    def make_read_only(cls, v: Mapping[str, FieldResult]) -> Mapping[str, FieldResult]:
        # Counts are cached below, so the mapping must not change under them
        return MappingProxyType(dict(v))

    @field_serializer("fields")
    def dump_fields(
        self, v: Mapping[str, FieldResult], info: SerializationInfo
    ) -> dict[str, Any]:
        return {name: fr.model_dump(mode=info.mode) for name, fr in v.items()}

    def model_post_init(self, __context: Any) -> None:
        for fr in self.fields.values():
            status = fr.status
            if status == FieldStatus.VALID:
                self._valid_count += 1
            elif status == FieldStatus.INVALID:
                self._invalid_count += 1
            if not fr.set:
                self._missing_count += 1

    # -- counts -------------------------------------------------------------

    @property
    def valid_count(self) -> int:
        return self._valid_count

    @property
    def invalid_count(self) -> int:
        return self._invalid_count

    @property
    def missing_count(self) -> int:
        """Fields that were absent, required or not."""
        return self._missing_count

    @property
    def success(self) -> bool:
        """``True`` when no field is invalid; missing optional fields are fine."""
        return self._invalid_count == 0

    # -- per-field lookups --------------------------------------------------

    @property
    def field_names(self) -> list[str]:
        return list(self.fields)

    def get_field(self, name: str) -> Optional[FieldResult]:
        return self.fields.get(name)

    def get_value(self, name: str) -> Any:
        fr = self.fields.get(name)
        return fr.value if fr is not None else None

    def get_original_value(self, name: str) -> Any:
        fr = self.fields.get(name)
        return fr.original_value if fr is not None else None

    def get_post_filter_value(self, name: str) -> Any:
        fr = self.fields.get(name)
        return fr.post_filter_value if fr is not None else None

    def get_reason(self, name: str) -> Optional[str]:
        fr = self.fields.get(name)
        return fr.reason if fr is not None else None

    def is_valid(self, name: str) -> Optional[bool]:
        return self._is(name, FieldStatus.VALID)

    def is_invalid(self, name: str) -> Optional[bool]:
        return self._is(name, FieldStatus.INVALID)

    def is_missing(self, name: str) -> Optional[bool]:
        return self._is(name, FieldStatus.MISSING)

    def _is(self, name: str, status: FieldStatus) -> Optional[bool]:
        fr = self.fields.get(name)
        if fr is None:
            return None
        return fr.status == status

    # -- listings -----------------------------------------------------------

    def valids(self) -> list[str]:
        return self._names_with(FieldStatus.VALID)

    def invalids(self) -> list[str]:
        return self._names_with(FieldStatus.INVALID)

    def missings(self) -> list[str]:
        return sorted(name for name, fr in self.fields.items() if not fr.set)

    def valid_values(self) -> dict[str, Any]:
        """Map every valid field to its final value."""
        return {
            name: fr.value
            for name, fr in self.fields.items()
            if fr.status == FieldStatus.VALID
        }

    def _names_with(self, status: FieldStatus) -> list[str]:
        return sorted(name for name, fr in self.fields.items() if fr.status == status)

    # -- combination and serialization -------------------------------------

    def merge(self, other: Results) -> Results:
        """Return a new aggregate of both; *other* wins on name clashes."""
        return Results(fields={**self.fields, **other.fields})

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form without live values."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Results:
        return cls.model_validate(data)

    def freeze(self) -> str:
        """Serialize to JSON, excluding live values.

        ``original_value`` and ``post_filter_value`` go through JSON as
        is, so tuples come back from ``thaw()`` as lists and non-JSON
        scalars (dates, decimals) as strings.
        """
        return self.model_dump_json()

    @classmethod
    def thaw(cls, frozen: str) -> Results:
        """Rebuild results from ``freeze()`` output."""
        return cls.model_validate_json(frozen)

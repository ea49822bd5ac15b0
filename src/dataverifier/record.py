"""
Raw value lookup for input records.

A record is either a mapping (``{"email": "a@b.c"}``) or an arbitrary
object.  For objects the field name is looked up as an attribute; a
method is called with no arguments (one that needs arguments is a
configuration error), any other attribute is used as is.
Both lookups return ``(present, value)`` so the verifier can tell an
absent field from one whose value is ``None``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dataverifier.errors import ConfigurationError


class FieldAccessor:
    """Fetches a named field's raw value from a record."""

    def get(self, record: Any, name: str) -> tuple[bool, Any]:
        raise NotImplementedError


class MappingAccessor(FieldAccessor):
    """Key lookup on a mapping."""

    def get(self, record: Mapping[str, Any], name: str) -> tuple[bool, Any]:
        if name in record:
            return True, record[name]
        return False, None


class AttributeAccessor(FieldAccessor):
    """Attribute lookup on an object, calling methods."""

    def get(self, record: Any, name: str) -> tuple[bool, Any]:
        if name.startswith("_"):
            return False, None
        attr = getattr(record, name, _ABSENT)
        if attr is _ABSENT:
            return False, None
        if callable(attr):
            try:
                return True, attr()
            except TypeError as exc:
                raise ConfigurationError(
                    f"Field '{name}' on {type(record).__name__} is not readable "
                    f"without arguments: {exc}"
                ) from exc
        return True, attr


_ABSENT = object()
_MAPPING_ACCESSOR = MappingAccessor()
_ATTRIBUTE_ACCESSOR = AttributeAccessor()


def accessor_for(record: Any) -> FieldAccessor:
    """Pick the accessor matching the record's shape."""
    if isinstance(record, Mapping):
        return _MAPPING_ACCESSOR
    return _ATTRIBUTE_ACCESSOR

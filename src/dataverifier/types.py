"""Shared enums for verification outcomes."""

from __future__ import annotations

from enum import Enum


class FieldStatus(str, Enum):
    """Exactly one of these holds for every verified field."""

    VALID = "valid"
    INVALID = "invalid"
    MISSING = "missing"


FIELD_STATUS_VALUES = [s.value for s in FieldStatus]

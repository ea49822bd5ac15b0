"""
Type checking and coercion capability.

The verifier never inspects type descriptors itself; it hands the
descriptor, the filtered value and the coercion settings to a
``TypeChecker`` and records whatever outcome comes back.  Callers with
their own type system subclass ``TypeChecker``.

The default ``PydanticTypeChecker`` accepts either a Python type /
annotation (``int``, ``list[str]``, ``Annotated[...]``) or one of the
names in ``_TYPE_MAP`` (used by YAML profiles).

Coercion semantics:
    - ``coerce=False``, no ``coercion``: strict check, no conversion.
    - ``coerce=True``: lax validation (``"42"`` becomes ``42``).
    - ``coercion=fn``: ``fn(value)`` is applied, then strictly checked.

Usage::

    from dataverifier.typecheck import PydanticTypeChecker

    checker = PydanticTypeChecker()
    outcome = checker.check("int", "42", coerce=True)
    outcome.ok, outcome.value   # True, 42
"""

from __future__ import annotations

import datetime
import decimal
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from dataverifier.errors import UnknownTypeError

logger = logging.getLogger(__name__)

Coercion = Callable[[Any], Any]

# Type name -> annotation for profiles loaded from YAML
_TYPE_MAP: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "list": list,
    "dict": dict,
    "decimal": decimal.Decimal,
    "date": datetime.date,
    "datetime": datetime.datetime,
}


def known_type_names() -> list[str]:
    """Return the type names a profile may use."""
    return sorted(_TYPE_MAP)


@dataclass(frozen=True)
class TypeCheckOutcome:
    """Result of one type check.

    Attributes:
        ok: ``True`` when the value satisfies the type.
        value: The value to keep, possibly coerced.  ``None`` on failure.
        reason: Why the check failed.  ``None`` on success.
    """

    ok: bool
    value: Any = None
    reason: Optional[str] = None


class TypeChecker(ABC):
    """Capability consumed by the verifier for the type stage."""

    @abstractmethod
    def check(
        self,
        type_: Any,
        value: Any,
        *,
        coerce: bool = False,
        coercion: Optional[Coercion] = None,
    ) -> TypeCheckOutcome:
        """Check *value* against *type_*, optionally coercing it first."""


class PydanticTypeChecker(TypeChecker):
    """Type checker backed by ``pydantic.TypeAdapter``.

    Adapters are cached per descriptor.  The cache is only written while
    checking; once warm it is read-only, so one instance can be shared.
    """

    def __init__(self) -> None:
        self._adapters: dict[Any, TypeAdapter] = {}

    def check(
        self,
        type_: Any,
        value: Any,
        *,
        coerce: bool = False,
        coercion: Optional[Coercion] = None,
    ) -> TypeCheckOutcome:
        adapter = self._adapter_for(type_)

        if not coerce and coercion is not None:
            try:
                value = coercion(value)
            except (TypeError, ValueError, ArithmeticError) as exc:
                return TypeCheckOutcome(ok=False, reason=f"coercion failed: {exc}")

        try:
            checked = adapter.validate_python(value, strict=not coerce)
        except ValidationError as exc:
            return TypeCheckOutcome(ok=False, reason=_first_message(exc))
        return TypeCheckOutcome(ok=True, value=checked)

    def _adapter_for(self, type_: Any) -> TypeAdapter:
        annotation = _resolve_descriptor(type_)
        try:
            cached = self._adapters.get(annotation)
        except TypeError:
            # Unhashable annotation; build without caching
            return TypeAdapter(annotation)
        if cached is None:
            cached = TypeAdapter(annotation)
            self._adapters[annotation] = cached
            logger.debug("Built type adapter for %r", annotation)
        return cached


def _resolve_descriptor(type_: Any) -> Any:
    if isinstance(type_, str):
        annotation = _TYPE_MAP.get(type_)
        if annotation is None:
            raise UnknownTypeError(type_)
        return annotation
    return type_


def _first_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "type constraint failed"
    return errors[0].get("msg", "type constraint failed")

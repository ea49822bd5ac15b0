"""
Profile verifier.

Verifies an input record against a ``Profile`` and returns a ``Results``
aggregate.  Each field goes through a fixed pipeline; the first failing
stage ends it:

    1. filters          global filters, then the field's own, left to right
    2. empty check      ``None`` and ``""`` (after filtering) mean "not set"
    3. required check   not set + required -> invalid, otherwise missing
    4. length check     ``min_length`` / ``max_length``
    5. type check       delegated to the ``TypeChecker``, may coerce

After the pipeline, ``dependent`` sub-profiles are verified against the
same record (dependents are top-level names in the record, not nested
under the parent) and their results are flattened into the same
namespace.  A set, valid parent with an invalid dependent becomes
invalid; a missing optional parent is left alone.

Post-checks run in a second pass once every field at the same profile
level (and its dependents) has been verified, so they can read siblings
through the ``Results`` they are given.

Only ``ConfigurationError`` escapes ``verify()``.

Usage::

    from dataverifier.verifier import Verifier

    verifier = Verifier(
        {"name": {"required": True, "filters": ["trim"]}},
        filters=["collapse"],
    )
    results = verifier.verify({"name": "  Ada   Lovelace "})
    results.get_value("name")   # "Ada Lovelace"
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional, Union

from dataverifier.config import get_config
from dataverifier.errors import ConfigurationError
from dataverifier.filters import (
    FilterIdentifier,
    Transform,
    apply_filters,
    resolve_filters,
)
from dataverifier.otel import emit_verification_result
from dataverifier.record import FieldAccessor, accessor_for
from dataverifier.results import FieldResult, Results
from dataverifier.schema import FieldSpec, Profile, as_profile
from dataverifier.typecheck import PydanticTypeChecker, TypeChecker
from dataverifier.types import FieldStatus

logger = logging.getLogger(__name__)

REQUIRED_MISSING = "required field missing"
POST_CHECK_FAILED = "post_check failed"
TYPE_CHECK_FAILED = "type constraint failed"


# ---------------------------------------------------------------------------
# Single-field pipeline
# ---------------------------------------------------------------------------


def _length_of(value: Any) -> int:
    try:
        return len(value)
    except TypeError:
        return len(str(value))


def _check_length(spec: FieldSpec, value: Any) -> Optional[str]:
    if spec.min_length is None and spec.max_length is None:
        return None
    length = _length_of(value)
    if spec.min_length is not None and length < spec.min_length:
        return f"length {length} is less than min_length {spec.min_length}"
    if spec.max_length is not None and length > spec.max_length:
        return f"length {length} is greater than max_length {spec.max_length}"
    return None


def _verify_field(
    name: str,
    spec: FieldSpec,
    raw_value: Any,
    transforms: Sequence[Transform],
    type_checker: TypeChecker,
) -> FieldResult:
    """Run the pipeline for one field."""
    post_filter_value = raw_value
    if raw_value is not None and transforms:
        post_filter_value = apply_filters(transforms, raw_value)

    value = post_filter_value
    if isinstance(value, str) and value == "":
        value = None

    base: dict[str, Any] = {
        "name": name,
        "original_value": raw_value,
        "post_filter_value": post_filter_value,
        "required": spec.required,
    }

    if value is None:
        if spec.required:
            return FieldResult(**base, reason=REQUIRED_MISSING)
        return FieldResult(**base)

    length_failure = _check_length(spec, value)
    if length_failure is not None:
        return FieldResult(**base, set=True, reason=length_failure)

    if spec.type is not None:
        outcome = type_checker.check(
            spec.type,
            value,
            coerce=spec.coerce,
            coercion=None if spec.coerce else spec.coercion,
        )
        if not outcome.ok:
            return FieldResult(
                **base, set=True, reason=outcome.reason or TYPE_CHECK_FAILED
            )
        value = outcome.value

    return FieldResult(**base, set=True, valid=True, value=value)


def verify_field(
    name: str,
    spec: Union[FieldSpec, Mapping[str, Any]],
    raw_value: Any,
    *,
    filters: Iterable[FilterIdentifier] = (),
    type_checker: Optional[TypeChecker] = None,
) -> FieldResult:
    """Verify a single raw value against a field spec.

    Runs filtering, required, length and type checks only; dependents and
    post-checks need a whole profile and are handled by ``Verifier``.

    Args:
        name: Field name recorded on the result.
        spec: ``FieldSpec`` or a mapping accepted by it.
        raw_value: Value as received.
        filters: Global filters applied before the spec's own filters.
        type_checker: Defaults to a fresh ``PydanticTypeChecker``.

    Raises:
        ConfigurationError: On unknown filters, types, or a malformed spec.
    """
    if not isinstance(spec, FieldSpec):
        spec = Profile.from_fields({name: spec}).fields[name]
    transforms = resolve_filters([*filters, *spec.filters])
    return _verify_field(
        name, spec, raw_value, transforms, type_checker or PydanticTypeChecker()
    )


# ---------------------------------------------------------------------------
# Dependents and post-checks
# ---------------------------------------------------------------------------


def _cascade_dependents(
    parent: FieldResult, dependents: Mapping[str, FieldResult]
) -> FieldResult:
    """Invalidate a valid parent when any dependent is invalid."""
    if not parent.valid:
        return parent
    failed = [
        name for name, fr in dependents.items() if fr.status == FieldStatus.INVALID
    ]
    if not failed:
        return parent
    return parent.model_copy(
        update={
            "valid": False,
            "value": None,
            "reason": f"dependent field(s) invalid: {', '.join(failed)}",
        }
    )


def _call_post_check(spec: FieldSpec, results: Results) -> tuple[bool, Optional[str]]:
    """Run a post-check and normalise it to ``(passed, reason)``."""
    try:
        if spec.post_check_argument is None:
            passed = spec.post_check(results)
        else:
            passed = spec.post_check(results, spec.post_check_argument)
    except ConfigurationError:
        raise
    except Exception as exc:
        logger.debug("post_check raised %s: %s", type(exc).__name__, exc)
        return False, str(exc) or type(exc).__name__
    if passed:
        return True, None
    return False, POST_CHECK_FAILED


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


class Verifier:
    """Verifies records against a profile.

    A ``Verifier`` holds only read-only configuration, so one instance may
    serve any number of ``verify`` calls.
    """

    def __init__(
        self,
        profile: Union[Profile, Mapping[str, Any]],
        filters: Optional[Iterable[FilterIdentifier]] = None,
        type_checker: Optional[TypeChecker] = None,
    ) -> None:
        """
        Args:
            profile: ``Profile`` or plain ``{name: spec}`` mapping.
            filters: Global filters, applied after the profile's own
                global filters.
            type_checker: Defaults to ``PydanticTypeChecker``.

        Raises:
            MalformedProfileError: If *profile* does not match the schema.
        """
        self.profile = as_profile(profile)
        self.filters: list[FilterIdentifier] = list(filters or [])
        self.type_checker = type_checker or PydanticTypeChecker()

    def verify(self, record: Any) -> Results:
        """Verify *record* and return the aggregated results.

        Args:
            record: Mapping of field name to raw value, or an object whose
                attributes/methods are named after the fields.

        Raises:
            ConfigurationError: On unknown filters or types, or a
                ``ConfigurationError`` raised by a post-check.
        """
        global_transforms = resolve_filters([*self.profile.filters, *self.filters])
        collected = self._verify_fields(
            self.profile.fields, record, accessor_for(record), global_transforms
        )
        results = Results(fields=collected)

        if results.success:
            logger.debug(
                "Verified profile=%s valid=%d missing=%d",
                self.profile.name,
                results.valid_count,
                results.missing_count,
            )
        else:
            logger.warning(
                "Verification failed: profile=%s invalid=%s",
                self.profile.name,
                results.invalids(),
            )

        if get_config().emit_span_events:
            emit_verification_result(results, self.profile.name)
        return results

    def _verify_fields(
        self,
        fields: Mapping[str, FieldSpec],
        record: Any,
        accessor: FieldAccessor,
        global_transforms: Sequence[Transform],
    ) -> dict[str, FieldResult]:
        """Verify one profile level, recursing into dependents."""
        collected: dict[str, FieldResult] = {}

        for name, spec in fields.items():
            _, raw_value = accessor.get(record, name)
            transforms = [*global_transforms, *resolve_filters(spec.filters)]
            result = _verify_field(name, spec, raw_value, transforms, self.type_checker)

            dependents: dict[str, FieldResult] = {}
            if spec.dependent:
                dependents = self._verify_fields(
                    spec.dependent, record, accessor, global_transforms
                )
                result = _cascade_dependents(result, dependents)

            collected[name] = result
            collected.update(dependents)

        for name, spec in fields.items():
            if spec.post_check is None or not collected[name].valid:
                continue
            passed, reason = _call_post_check(spec, Results(fields=collected))
            if not passed:
                collected[name] = collected[name].model_copy(
                    update={"valid": False, "value": None, "reason": reason}
                )

        return collected


def verify(
    profile: Union[Profile, Mapping[str, Any]],
    record: Any,
    filters: Optional[Iterable[FilterIdentifier]] = None,
    type_checker: Optional[TypeChecker] = None,
) -> Results:
    """One-shot form of ``Verifier(profile, filters, type_checker).verify(record)``."""
    return Verifier(profile, filters=filters, type_checker=type_checker).verify(record)

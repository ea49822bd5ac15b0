"""
OTel span event emission for verification results.

Usage::

    from dataverifier.otel import emit_verification_result

    emit_verification_result(results, "signup")
"""

from __future__ import annotations

import logging

from opentelemetry import trace as otel_trace

from dataverifier.results import Results

logger = logging.getLogger(__name__)

VERIFY_COMPLETE_EVENT = "dataverifier.verify.complete"


def _add_span_event(name: str, attributes: dict[str, str | int | float | bool]) -> None:
    span = otel_trace.get_current_span()
    if span.is_recording():
        span.add_event(name=name, attributes=attributes)


def emit_verification_result(results: Results, profile_name: str) -> None:
    """Emit a span event summarising one ``verify`` call.

    Event name: ``dataverifier.verify.complete``.  Nothing is recorded
    unless the current span is recording, which is never the case
    without a configured tracer provider.
    """
    invalid = results.invalids()
    attrs: dict[str, str | int | float | bool] = {
        "dataverifier.profile": profile_name,
        "dataverifier.success": results.success,
        "dataverifier.valid_count": results.valid_count,
        "dataverifier.invalid_count": results.invalid_count,
        "dataverifier.missing_count": results.missing_count,
    }

    # First 3 invalid field names for quick filtering
    for i, field_name in enumerate(invalid[:3]):
        attrs[f"dataverifier.invalid.{i}"] = field_name

    logger.debug(
        "Emitting %s: profile=%s success=%s",
        VERIFY_COMPLETE_EVENT,
        profile_name,
        results.success,
    )
    _add_span_event(VERIFY_COMPLETE_EVENT, attrs)

"""
Exception taxonomy for profile verification.

Only configuration problems are raised out of ``Verifier.verify()``.
Data problems (missing, too long, wrong type, failed post-check) are
recorded per field in ``Results`` and never raised.

Usage::

    from dataverifier.errors import ConfigurationError

    try:
        results = verifier.verify(record)
    except ConfigurationError as exc:
        ...  # the profile itself is broken
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """A profile, filter or type descriptor cannot be used as configured."""


class UnknownFilterError(ConfigurationError):
    """A filter name is not in the built-in filter table."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown filter: {name}")


class UnknownTypeError(ConfigurationError):
    """A named type descriptor is not in the type table."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown type: {name}")


class MalformedProfileError(ConfigurationError):
    """A profile mapping does not match the profile schema."""


class PostCheckError(Exception):
    """Raised from a post-check to fail the field with a specific reason.

    Any exception raised by a post-check is converted into a field reason;
    this class exists so post-checks have an explicit way to say why.
    """

"""
dataverifier - profile-driven verification of input records.

A profile declares, per field, whether it is required, how it is
filtered, its length bounds, its type (with optional coercion), the
dependent fields that must verify alongside it and a final post-check.
Verifying a record yields a ``Results`` aggregate describing every field
as valid, invalid or missing.

Public API::

    from dataverifier import (
        # Schema
        FieldSpec,
        Profile,
        # Verification
        Verifier,
        verify,
        verify_field,
        # Results
        FieldResult,
        Results,
        FieldStatus,
        # Loader
        ProfileLoader,
        # Capabilities
        TypeChecker,
        PydanticTypeChecker,
        TypeCheckOutcome,
        # Errors
        ConfigurationError,
        UnknownFilterError,
        ...
    )

Example::

    from dataverifier import Verifier
    from dataverifier.checks import fields_match

    verifier = Verifier({
        "password": {"required": True, "min_length": 8,
                     "post_check": fields_match("password", "password2")},
        "password2": {"required": True},
    })
    results = verifier.verify(form)
    if not results.success:
        print(results.invalids())
"""

from dataverifier.checks import fields_match
from dataverifier.errors import (
    ConfigurationError,
    MalformedProfileError,
    PostCheckError,
    UnknownFilterError,
    UnknownTypeError,
)
from dataverifier.filters import builtin_filter_names, resolve_filter
from dataverifier.loader import ProfileLoader
from dataverifier.results import FieldResult, Results
from dataverifier.schema import FieldSpec, Profile
from dataverifier.typecheck import PydanticTypeChecker, TypeChecker, TypeCheckOutcome
from dataverifier.types import FieldStatus
from dataverifier.verifier import Verifier, verify, verify_field

__all__ = [
    # Schema
    "FieldSpec",
    "Profile",
    # Verification
    "Verifier",
    "verify",
    "verify_field",
    # Results
    "FieldResult",
    "Results",
    "FieldStatus",
    # Loader
    "ProfileLoader",
    # Filters
    "builtin_filter_names",
    "resolve_filter",
    # Type checking
    "TypeChecker",
    "PydanticTypeChecker",
    "TypeCheckOutcome",
    # Post-checks
    "fields_match",
    # Errors
    "ConfigurationError",
    "MalformedProfileError",
    "PostCheckError",
    "UnknownFilterError",
    "UnknownTypeError",
]

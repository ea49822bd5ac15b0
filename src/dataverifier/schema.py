"""
Pydantic v2 models for verification profiles.

A profile maps field names to ``FieldSpec`` instances.  Profiles can be
built in code, from a plain nested mapping, or loaded from YAML via
``dataverifier.loader.ProfileLoader``.

All models use ``extra="forbid"`` so a misspelt constraint is rejected
when the profile is built rather than silently ignored.  Building errors
are raised as ``MalformedProfileError``.

Usage::

    from dataverifier.schema import Profile

    profile = Profile.from_fields({
        "email": {"required": True, "filters": ["trim"], "max_length": 120},
        "age": {"type": "int", "coerce": True},
    })
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from dataverifier.errors import MalformedProfileError


# ---------------------------------------------------------------------------
# Field-level specification
# ---------------------------------------------------------------------------


class FieldSpec(BaseModel):
    """Constraints for a single field."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    required: bool = Field(False, description="Absence makes the field invalid")
    type: Optional[Any] = Field(
        None, description="Type descriptor handed to the type checker"
    )
    coerce: bool = Field(False, description="Let the type checker convert the value")
    coercion: Optional[Callable[[Any], Any]] = Field(
        None, description="Explicit coercion rule, ignored when coerce is set"
    )
    filters: list[Union[str, Callable[[str], str]]] = Field(
        default_factory=list,
        description="Filters applied after the global filters, left to right",
    )
    min_length: Optional[int] = Field(None, ge=0)
    max_length: Optional[int] = Field(None, ge=0)
    dependent: Optional[dict[str, FieldSpec]] = Field(
        None, description="Fields that must also verify when this one is set"
    )
    post_check: Optional[Callable[..., Any]] = Field(
        None, description="Final predicate called with the in-progress Results"
    )
    post_check_argument: Optional[Any] = Field(
        None, description="Extra argument passed through to post_check"
    )
    description: Optional[str] = None

    @model_validator(mode="after")
    def _check_length_bounds(self) -> FieldSpec:
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise ValueError(
                f"min_length {self.min_length} is greater than "
                f"max_length {self.max_length}"
            )
        return self


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


class Profile(BaseModel):
    """
    Root model for a verification profile.

    ``filters`` are global: they run before each field's own filters, for
    every field including dependents.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field("profile", min_length=1)
    description: Optional[str] = None
    filters: list[Union[str, Callable[[str], str]]] = Field(default_factory=list)
    fields: dict[str, FieldSpec] = Field(default_factory=dict)

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], **kwargs: Any) -> Profile:
        """Build a profile from a ``{name: spec}`` mapping.

        Specs may be ``FieldSpec`` instances or plain mappings.

        Raises:
            MalformedProfileError: If any spec does not match the schema.
        """
        return cls.parse({**kwargs, "fields": fields})

    @classmethod
    def parse(cls, raw: Any) -> Profile:
        """Validate a full profile mapping (as found in a YAML file).

        Raises:
            MalformedProfileError: If *raw* does not match the schema.
        """
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise MalformedProfileError(f"Malformed profile: {exc}") from exc


FieldSpec.model_rebuild()


def as_profile(profile: Union[Profile, Mapping[str, Any]]) -> Profile:
    """Accept a ``Profile`` or a plain field mapping."""
    if isinstance(profile, Profile):
        return profile
    if isinstance(profile, Mapping):
        return Profile.from_fields(profile)
    raise MalformedProfileError(
        f"Profile must be a Profile or a mapping, got {type(profile).__name__}"
    )

"""
Filter resolution and application.

A filter identifier is either the name of a built-in transform or any
callable taking a string and returning a string.  Names are resolved
once per ``verify`` call; an unknown name is a configuration error.

Built-in filters:
    - ``trim``     strip leading and trailing whitespace
    - ``collapse`` replace each run of whitespace with a single space
    - ``flatten``  remove all whitespace
    - ``lower``    lowercase
    - ``upper``    uppercase

Usage::

    from dataverifier.filters import apply_filters, resolve_filters

    transforms = resolve_filters(["trim", "collapse"])
    apply_filters(transforms, "  foo\\t bar ")   # "foo bar"
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Union

from dataverifier.errors import UnknownFilterError

logger = logging.getLogger(__name__)

Transform = Callable[[str], str]
FilterIdentifier = Union[str, Transform]

_WHITESPACE_RUN = re.compile(r"\s+")

_BUILTIN_FILTERS: dict[str, Transform] = {
    "trim": lambda v: v.strip(),
    "collapse": lambda v: _WHITESPACE_RUN.sub(" ", v),
    "flatten": lambda v: _WHITESPACE_RUN.sub("", v),
    "lower": lambda v: v.lower(),
    "upper": lambda v: v.upper(),
}


def builtin_filter_names() -> list[str]:
    """Return the names accepted by ``resolve_filter``."""
    return sorted(_BUILTIN_FILTERS)


def resolve_filter(identifier: FilterIdentifier) -> Transform:
    """Resolve a filter name or callable to a transform.

    Raises:
        UnknownFilterError: If *identifier* is a string not in the table.
        TypeError: If *identifier* is neither a string nor callable.
    """
    if isinstance(identifier, str):
        transform = _BUILTIN_FILTERS.get(identifier)
        if transform is None:
            raise UnknownFilterError(identifier)
        return transform
    if callable(identifier):
        return identifier
    raise TypeError(
        f"Filter must be a name or a callable, got {type(identifier).__name__}"
    )


def resolve_filters(identifiers: Iterable[FilterIdentifier]) -> list[Transform]:
    """Resolve a sequence of filter identifiers, preserving order."""
    return [resolve_filter(i) for i in identifiers]


def apply_filters(transforms: Sequence[Transform], value: Any) -> Any:
    """Run *value* through *transforms* left to right.

    Strings are transformed directly.  Lists and tuples have each string
    member transformed.  Anything else is returned unchanged.
    """
    if not transforms:
        return value
    if isinstance(value, str):
        return _chain(transforms, value)
    if isinstance(value, (list, tuple)):
        return type(value)(
            _chain(transforms, v) if isinstance(v, str) else v for v in value
        )
    logger.debug("Skipping filters for non-string value of type %s", type(value).__name__)
    return value


def _chain(transforms: Sequence[Transform], value: str) -> str:
    for transform in transforms:
        value = transform(value)
    return value

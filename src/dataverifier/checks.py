"""Reusable post-checks."""

from __future__ import annotations

from collections.abc import Callable

from dataverifier.results import Results


def fields_match(*names: str) -> Callable[[Results], bool]:
    """Post-check passing when all *names* are valid and equal.

    Typical use is a confirmation field::

        {"password": {"required": True, "post_check": fields_match("password", "password2")},
         "password2": {"required": True}}
    """
    if len(names) < 2:
        raise ValueError("fields_match needs at least two field names")

    def _check(results: Results) -> bool:
        if not all(results.is_valid(n) for n in names):
            return False
        first = results.get_value(names[0])
        return all(results.get_value(n) == first for n in names[1:])

    return _check

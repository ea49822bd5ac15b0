"""
YAML profile loader with per-path caching.

Loads verification profile YAML files, validates them against the
Pydantic schema models, and caches the result per file path.

Profiles loaded from YAML can use every constraint except the ones that
need Python callables (``coercion``, ``post_check`` and custom filters);
named filters and named types cover the rest.

Usage::

    from dataverifier.loader import ProfileLoader

    loader = ProfileLoader()
    profile = loader.load(Path("signup.profile.yaml"))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, ClassVar

import yaml

from dataverifier.errors import MalformedProfileError
from dataverifier.schema import Profile

logger = logging.getLogger(__name__)


class ProfileLoader:
    """Loads and caches verification profiles from YAML files."""

    _cache: ClassVar[dict[str, Profile]] = {}

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the profile cache (useful in tests)."""
        cls._cache.clear()

    def load(self, path: Path) -> Profile:
        """Load a profile from a YAML file.

        Args:
            path: Path to the YAML profile file.

        Returns:
            Validated ``Profile`` instance.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file contains invalid YAML.
            MalformedProfileError: If the YAML does not match the schema.
        """
        key = str(path.resolve())
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Profile cache hit: %s", key)
            return cached

        if not path.exists():
            raise FileNotFoundError(f"Profile file not found: {path}")

        with open(path) as fh:
            raw = yaml.safe_load(fh)

        profile = self._parse(raw, source=str(path))
        self._cache[key] = profile

        logger.debug(
            "Loaded profile: name=%s, fields=%d, filters=%s",
            profile.name,
            len(profile.fields),
            profile.filters,
        )
        return profile

    def load_from_string(self, yaml_str: str) -> Profile:
        """Load a profile from a YAML string (convenience for testing).

        Args:
            yaml_str: YAML content as a string.

        Returns:
            Validated ``Profile`` instance.
        """
        return self._parse(yaml.safe_load(yaml_str), source="<string>")

    @staticmethod
    def _parse(raw: Any, source: str) -> Profile:
        if not isinstance(raw, dict):
            raise MalformedProfileError(
                f"Expected YAML mapping at root of {source}, "
                f"got {type(raw).__name__}"
            )
        return Profile.parse(raw)

"""
Centralized configuration for dataverifier.

Uses Pydantic BaseSettings for environment variable integration
and validation.

Configuration sources (in order of precedence):
1. Explicit arguments to ``get_config()``
2. Environment variables (DATAVERIFIER_*)
3. .env file
4. Default values

Configuration is read while verifying but never written, so concurrent
``verify`` calls can share it.

Example:
    from dataverifier.config import get_config

    config = get_config()
    print(config.emit_span_events)  # From DATAVERIFIER_EMIT_SPAN_EVENTS or default
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class VerifierConfig(BaseSettings):
    """
    Settings for dataverifier.

    All settings can be overridden via environment variables
    prefixed with DATAVERIFIER_.

    Example:
        export DATAVERIFIER_LOG_LEVEL=debug
        export DATAVERIFIER_PROFILE_DIR=./profiles
    """

    model_config = SettingsConfigDict(
        env_prefix="DATAVERIFIER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        description="Logging level for the dataverifier logger",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format (json for log aggregation, text for console)",
    )

    # Telemetry
    emit_span_events: bool = Field(
        default=True,
        description="Add a span event to the current OTel span after each verify",
    )

    # Profiles
    profile_dir: str = Field(
        default="~/.dataverifier/profiles",
        description="Directory searched for <name>.profile.yaml by the CLI",
    )

    @field_validator("profile_dir")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ and environment variables in paths."""
        return os.path.expanduser(os.path.expandvars(v))

    def get_profile_path(self, name: str) -> Path:
        """Path a named profile is expected at."""
        return Path(self.profile_dir) / f"{name}.profile.yaml"


# Global singleton
_config: Optional[VerifierConfig] = None


def get_config(**overrides) -> VerifierConfig:
    """
    Get the global configuration instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless overrides are provided.

    Args:
        **overrides: Override any config values

    Returns:
        VerifierConfig instance
    """
    global _config

    if overrides or _config is None:
        _config = VerifierConfig(**overrides)

    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None

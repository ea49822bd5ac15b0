"""
Pytest configuration and fixtures for dataverifier tests.
"""

from __future__ import annotations

import os
from typing import Dict, Generator

import pytest

from dataverifier.config import reset_config
from dataverifier.loader import ProfileLoader


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(scope="session")
def test_env() -> Dict[str, str]:
    """Test environment variables."""
    return {
        "DATAVERIFIER_LOG_LEVEL": "warning",
        "DATAVERIFIER_EMIT_SPAN_EVENTS": "true",
    }


@pytest.fixture(autouse=True)
def set_test_env(test_env: Dict[str, str]) -> Generator[None, None, None]:
    """Set test environment variables and reset global state for each test."""
    original = {}
    for key, value in test_env.items():
        original[key] = os.environ.get(key)
        os.environ[key] = value
    reset_config()
    ProfileLoader.clear_cache()

    yield

    reset_config()
    ProfileLoader.clear_cache()
    for key, value in original.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


# ============================================================================
# Profile Fixtures
# ============================================================================


@pytest.fixture
def signup_profile_yaml() -> str:
    """Signup form profile in YAML form."""
    return """\
name: signup
filters: [trim]
fields:
  username:
    required: true
    min_length: 3
    max_length: 12
    filters: [lower]
  age:
    type: int
    coerce: true
  email:
    required: true
    dependent:
      email2:
        required: true
"""


@pytest.fixture
def signup_record() -> dict:
    """Record that satisfies ``signup_profile_yaml``."""
    return {
        "username": "  Ada ",
        "age": "36",
        "email": "ada@example.org",
        "email2": "ada@example.org",
    }

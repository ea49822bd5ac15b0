"""Tests for profile YAML loader."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from dataverifier.errors import MalformedProfileError
from dataverifier.loader import ProfileLoader
from dataverifier.verifier import Verifier


class TestProfileLoader:
    def test_load_from_string(self, signup_profile_yaml):
        profile = ProfileLoader().load_from_string(signup_profile_yaml)
        assert profile.name == "signup"
        assert profile.filters == ["trim"]
        assert list(profile.fields) == ["username", "age", "email"]
        assert profile.fields["email"].dependent["email2"].required is True

    def test_load_from_file(self, tmp_path: Path, signup_profile_yaml):
        profile_file = tmp_path / "signup.profile.yaml"
        profile_file.write_text(signup_profile_yaml)
        profile = ProfileLoader().load(profile_file)
        assert profile.name == "signup"

    def test_load_caches_result(self, tmp_path: Path, signup_profile_yaml):
        profile_file = tmp_path / "signup.profile.yaml"
        profile_file.write_text(signup_profile_yaml)
        loader = ProfileLoader()
        first = loader.load(profile_file)
        profile_file.write_text("name: changed\n")
        assert loader.load(profile_file) is first

    def test_clear_cache(self, tmp_path: Path, signup_profile_yaml):
        profile_file = tmp_path / "signup.profile.yaml"
        profile_file.write_text(signup_profile_yaml)
        first = ProfileLoader().load(profile_file)
        ProfileLoader.clear_cache()
        assert ProfileLoader().load(profile_file) is not first

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ProfileLoader().load(tmp_path / "nope.yaml")

    def test_non_mapping_root(self):
        with pytest.raises(MalformedProfileError, match="Expected YAML mapping"):
            ProfileLoader().load_from_string("- a\n- b\n")

    def test_schema_violation(self):
        bad = textwrap.dedent("""\
            fields:
              name:
                required: true
                maximum: 3
        """)
        with pytest.raises(MalformedProfileError):
            ProfileLoader().load_from_string(bad)

    def test_loaded_profile_verifies(self, signup_profile_yaml, signup_record):
        profile = ProfileLoader().load_from_string(signup_profile_yaml)
        results = Verifier(profile).verify(signup_record)
        assert results.success is True
        assert results.get_value("username") == "ada"
        assert results.get_value("age") == 36
        assert results.valid_count == 4

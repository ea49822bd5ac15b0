"""Tests for result models, lookups and serialization."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from dataverifier.results import FieldResult, Results
from dataverifier.types import FieldStatus


@pytest.fixture
def results() -> Results:
    return Results(
        fields={
            "name": FieldResult(
                name="name",
                value="Ada",
                original_value=" Ada ",
                post_filter_value="Ada",
                valid=True,
                set=True,
            ),
            "age": FieldResult(
                name="age",
                original_value="old",
                post_filter_value="old",
                set=True,
                reason="Input should be a valid integer",
            ),
            "email": FieldResult(
                name="email", required=True, reason="required field missing"
            ),
            "nickname": FieldResult(name="nickname"),
        }
    )


class TestFieldResult:
    def test_status(self, results):
        assert results.get_field("name").status == FieldStatus.VALID
        assert results.get_field("age").status == FieldStatus.INVALID
        assert results.get_field("email").status == FieldStatus.INVALID
        assert results.get_field("nickname").status == FieldStatus.MISSING

    def test_frozen(self, results):
        with pytest.raises(ValidationError):
            results.get_field("name").valid = False


class TestImmutability:
    def test_fields_mapping_is_read_only(self, results):
        flipped = results.get_field("name").model_copy(update={"valid": False})
        with pytest.raises(TypeError):
            results.fields["name"] = flipped
        with pytest.raises(TypeError):
            del results.fields["age"]
        assert results.is_valid("name") is True
        assert results.valid_count == 1

    def test_fields_attribute_cannot_be_replaced(self, results):
        with pytest.raises(ValidationError):
            results.fields = {}

    def test_empty_results_read_only(self):
        with pytest.raises(TypeError):
            Results().fields["a"] = FieldResult(name="a")

    def test_source_dict_changes_do_not_leak(self):
        source = {"a": FieldResult(name="a", value="x", valid=True, set=True)}
        built = Results(fields=source)
        source["b"] = FieldResult(name="b", set=True, reason="bad")
        assert built.field_names == ["a"]
        assert built.success is True


class TestCounts:
    def test_counts(self, results):
        assert results.valid_count == 1
        assert results.invalid_count == 2
        assert results.missing_count == 2
        assert results.success is False

    def test_empty_results_succeed(self):
        empty = Results()
        assert empty.success is True
        assert empty.valid_count == empty.invalid_count == empty.missing_count == 0

    def test_missing_optional_only_succeeds(self):
        only_missing = Results(fields={"a": FieldResult(name="a")})
        assert only_missing.success is True
        assert only_missing.missing_count == 1


class TestLookups:
    def test_values(self, results):
        assert results.get_value("name") == "Ada"
        assert results.get_original_value("name") == " Ada "
        assert results.get_post_filter_value("name") == "Ada"
        assert results.get_value("age") is None
        assert results.get_reason("email") == "required field missing"

    @pytest.mark.parametrize(
        "method",
        [
            "get_field",
            "get_value",
            "get_original_value",
            "get_post_filter_value",
            "get_reason",
            "is_valid",
            "is_invalid",
            "is_missing",
        ],
    )
    def test_unknown_name_returns_none(self, results, method):
        assert getattr(results, method)("unknown") is None

    def test_listings(self, results):
        assert results.valids() == ["name"]
        assert results.invalids() == ["age", "email"]
        assert results.missings() == ["email", "nickname"]
        assert results.valid_values() == {"name": "Ada"}


class TestMerge:
    def test_merge_returns_new_results(self, results):
        other = Results(
            fields={
                "age": FieldResult(name="age", value=36, valid=True, set=True),
                "zip": FieldResult(name="zip", value="90210", valid=True, set=True),
            }
        )
        merged = results.merge(other)
        assert merged is not results
        assert merged.is_valid("age") is True
        assert merged.valid_count == 3
        assert results.is_invalid("age") is True


class TestSerialization:
    def test_freeze_excludes_value(self, results):
        data = json.loads(results.freeze())
        assert "value" not in data["fields"]["name"]
        assert data["fields"]["name"]["original_value"] == " Ada "

    def test_thaw_round_trip(self, results):
        thawed = Results.thaw(results.freeze())
        for name, original in results.fields.items():
            copy = thawed.get_field(name)
            assert copy.original_value == original.original_value
            assert copy.post_filter_value == original.post_filter_value
            assert copy.valid == original.valid
            assert copy.reason == original.reason
            assert copy.set == original.set
        assert thawed.get_value("name") is None
        assert thawed.invalid_count == results.invalid_count
        assert thawed.missing_count == results.missing_count

    def test_dict_round_trip(self, results):
        data = results.to_dict()
        assert "value" not in data["fields"]["age"]
        rebuilt = Results.from_dict(data)
        assert rebuilt.invalids() == results.invalids()

    def test_thaw_returns_tuples_as_lists(self):
        live = Results(
            fields={
                "tags": FieldResult(
                    name="tags",
                    value=("x", "y"),
                    original_value=("x", "y"),
                    post_filter_value=("x", "y"),
                    valid=True,
                    set=True,
                )
            }
        )
        thawed = Results.thaw(live.freeze())
        assert thawed.get_original_value("tags") == ["x", "y"]
        assert thawed.get_post_filter_value("tags") == ["x", "y"]

    def test_thawed_fields_are_read_only(self, results):
        thawed = Results.thaw(results.freeze())
        with pytest.raises(TypeError):
            thawed.fields["extra"] = FieldResult(name="extra")

    def test_unserializable_value_ignored(self):
        live = Results(
            fields={"f": FieldResult(name="f", value=object(), original_value="x", valid=True, set=True)}
        )
        assert json.loads(live.freeze())["fields"]["f"]["valid"] is True

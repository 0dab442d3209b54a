"""
Unit tests for property type descriptors and the runtime type checker.

Tests cover:
- PropType tags and their display names
- Descriptor discrimination (bare tag vs options record)
- Resolution of Python classes and options records to tags
- check_type across every scalar and list kind
"""

from __future__ import annotations

import re
import typing
from datetime import date, datetime
from typing import Any

import pytest
from neo4j.time import Date as Neo4jDate
from neo4j.time import DateTime as Neo4jDateTime

from neo_ogm.graph.exceptions import SchemaDefinitionError, TypeMismatchError
from neo_ogm.graph.types import (
    PropType,
    SchemaTypeOpts,
    check_type,
    is_schema_type_opts,
    kind_of,
    resolve_prop_type,
    to_schema_type_opts,
)

SAMPLES: dict[PropType, Any] = {
    PropType.STRING: "Ada",
    PropType.NUMBER: 36,
    PropType.BOOLEAN: True,
    PropType.DATE: date(1815, 12, 10),
    PropType.STRING_LIST: ["math", "poetry"],
    PropType.NUMBER_LIST: [1, 2.5],
    PropType.BOOLEAN_LIST: [False, True],
    PropType.DATE_LIST: [datetime(2024, 1, 15, 10, 30)],
}


# =============================================================================
# Test: PropType
# =============================================================================


class TestPropType:
    """Tests for the closed set of type tags."""

    def test_display_names(self) -> None:
        """Display names follow the scalar and Scalar[] convention."""
        assert PropType.NUMBER.display_name == "Number"
        assert PropType.DATE_LIST.display_name == "Date[]"

    def test_list_kinds_know_their_element(self) -> None:
        assert PropType.STRING_LIST.is_list
        assert PropType.STRING_LIST.element_type is PropType.STRING
        assert not PropType.STRING.is_list
        assert PropType.STRING.element_type is PropType.STRING

    def test_list_of_scalar(self) -> None:
        assert PropType.BOOLEAN.list_of() is PropType.BOOLEAN_LIST

    def test_list_of_list_is_rejected(self) -> None:
        """Lists of lists are not a supported kind."""
        with pytest.raises(SchemaDefinitionError):
            PropType.NUMBER_LIST.list_of()


# =============================================================================
# Test: Discriminator
# =============================================================================


class TestIsSchemaTypeOpts:
    """Tests for telling options records apart from bare tags."""

    @pytest.mark.parametrize(
        "prop_def",
        [
            SchemaTypeOpts(type=str),
            {"type": int},
            {"type": PropType.DATE, "required": True},
        ],
    )
    def test_options_records(self, prop_def: Any) -> None:
        assert is_schema_type_opts(prop_def) is True

    @pytest.mark.parametrize(
        "prop_def",
        [str, int, bool, date, list[str], PropType.STRING, PropType.NUMBER_LIST, {"required": True}],
    )
    def test_bare_tags(self, prop_def: Any) -> None:
        assert is_schema_type_opts(prop_def) is False


# =============================================================================
# Test: Descriptor Resolution
# =============================================================================


class TestResolvePropType:
    """Tests for extracting the bare tag from any descriptor."""

    @pytest.mark.parametrize(
        ("prop_def", "expected"),
        [
            (str, PropType.STRING),
            (int, PropType.NUMBER),
            (float, PropType.NUMBER),
            (bool, PropType.BOOLEAN),
            (date, PropType.DATE),
            (datetime, PropType.DATE),
            (Neo4jDateTime, PropType.DATE),
            (list[str], PropType.STRING_LIST),
            (typing.List[int], PropType.NUMBER_LIST),
            (list[datetime], PropType.DATE_LIST),
            (PropType.BOOLEAN_LIST, PropType.BOOLEAN_LIST),
            ({"type": float, "index": True}, PropType.NUMBER),
            (SchemaTypeOpts(type=list[bool]), PropType.BOOLEAN_LIST),
        ],
    )
    def test_resolves(self, prop_def: Any, expected: PropType) -> None:
        assert resolve_prop_type(prop_def) is expected

    @pytest.mark.parametrize("prop_def", [list, dict, bytes, list[list[str]], "String", None])
    def test_unsupported_descriptor(self, prop_def: Any) -> None:
        with pytest.raises(SchemaDefinitionError):
            resolve_prop_type(prop_def, "field")

    def test_error_names_the_key(self) -> None:
        with pytest.raises(SchemaDefinitionError) as exc_info:
            resolve_prop_type(dict, "address")

        assert exc_info.value.key == "address"
        assert "address" in str(exc_info.value)

    def test_nested_options_record_rejected(self) -> None:
        """An options record's type can never be another options record."""
        with pytest.raises(SchemaDefinitionError):
            resolve_prop_type({"type": {"type": str}}, "name")


# =============================================================================
# Test: SchemaTypeOpts
# =============================================================================


class TestSchemaTypeOpts:
    """Tests for the options record model."""

    def test_defaults(self) -> None:
        opts = SchemaTypeOpts(type=str)

        assert opts.type is PropType.STRING
        assert not (opts.unique or opts.required or opts.index)
        assert opts.enum is None
        assert opts.match is None

    def test_match_string_is_compiled(self) -> None:
        opts = to_schema_type_opts({"type": str, "match": r"\d+"})

        assert isinstance(opts.match, re.Pattern)
        assert opts.match.pattern == r"\d+"

    def test_enum_becomes_tuple(self) -> None:
        opts = to_schema_type_opts({"type": str, "enum": ["a", "b"]})

        assert opts.enum == ("a", "b")

    def test_is_frozen(self) -> None:
        opts = SchemaTypeOpts(type=str)

        with pytest.raises(ValueError):
            opts.required = True

    @pytest.mark.parametrize(
        "record",
        [
            {"type": str, "lowercase": True, "uppercase": True},
            {"type": int, "lowercase": True},
            {"type": bool, "match": "true"},
            {"type": str, "nullable": True},
            {"required": True, "type": list},
        ],
    )
    def test_invalid_records(self, record: dict[str, Any]) -> None:
        with pytest.raises(SchemaDefinitionError):
            to_schema_type_opts(record, "field")

    def test_text_list_accepts_text_options(self) -> None:
        opts = to_schema_type_opts({"type": list[str], "uppercase": True, "match": "[A-Z]+"})

        assert opts.type is PropType.STRING_LIST


# =============================================================================
# Test: kind_of
# =============================================================================


class TestKindOf:
    """Tests for runtime kind detection."""

    def test_bool_is_not_a_number(self) -> None:
        """bool subclasses int but is its own kind."""
        assert kind_of(True) is PropType.BOOLEAN
        assert kind_of(1) is PropType.NUMBER

    def test_float_is_a_number(self) -> None:
        assert kind_of(0.5) is PropType.NUMBER

    def test_driver_temporal_values_are_dates(self) -> None:
        assert kind_of(Neo4jDate(2024, 1, 15)) is PropType.DATE
        assert kind_of(Neo4jDateTime(2024, 1, 15, 10, 30, 0)) is PropType.DATE

    def test_tuple_counts_as_list(self) -> None:
        assert kind_of(("a", "b")) is PropType.STRING_LIST

    @pytest.mark.parametrize("value", [[], ["a", 1], [True, 1], {"a": 1}, None, b"x"])
    def test_no_kind(self, value: Any) -> None:
        assert kind_of(value) is None

    def test_int64_bounds(self) -> None:
        """Only integers that fit a Cypher 64-bit integer are Numbers."""
        assert kind_of(2**63 - 1) is PropType.NUMBER
        assert kind_of(-(2**63)) is PropType.NUMBER
        assert kind_of(2**63) is None
        assert kind_of(-(2**63) - 1) is None
        assert kind_of([1, 2**64]) is None


# =============================================================================
# Test: check_type
# =============================================================================


class TestCheckType:
    """Tests for the runtime type checker."""

    @pytest.mark.parametrize("declared", list(PropType))
    @pytest.mark.parametrize("value_kind", list(PropType))
    def test_exact_kind_match_only(self, declared: PropType, value_kind: PropType) -> None:
        """Passes iff the value's kind is exactly the declared kind."""
        value = SAMPLES[value_kind]

        if declared is value_kind:
            check_type("field", value, declared)
        else:
            with pytest.raises(TypeMismatchError):
                check_type("field", value, declared)

    def test_mismatch_message(self) -> None:
        """The message names the key and both display names verbatim."""
        with pytest.raises(TypeMismatchError) as exc_info:
            check_type("age", "thirty", int)

        error = exc_info.value
        assert str(error) == "Type mismatch: expected age to be Number but received String."
        assert (error.key, error.expected, error.actual) == ("age", "Number", "String")

    def test_mismatch_is_a_type_error(self) -> None:
        with pytest.raises(TypeError):
            check_type("age", "thirty", PropType.NUMBER)

    def test_bool_rejected_for_number(self) -> None:
        with pytest.raises(TypeMismatchError, match="received Boolean"):
            check_type("count", True, int)

    def test_options_record_is_resolved(self) -> None:
        check_type("age", 30, {"type": int, "required": True})

        with pytest.raises(TypeMismatchError):
            check_type("age", "30", SchemaTypeOpts(type=int))

    def test_python_class_descriptors(self) -> None:
        check_type("score", 1.5, float)
        check_type("score", 2, float)
        check_type("born", datetime(1815, 12, 10), date)

    def test_empty_list_matches_any_list_kind(self) -> None:
        for declared in (PropType.STRING_LIST, PropType.DATE_LIST):
            check_type("tags", [], declared)

    def test_empty_list_is_not_a_scalar(self) -> None:
        with pytest.raises(TypeMismatchError, match="received list"):
            check_type("name", [], str)

    def test_mixed_list_rejected(self) -> None:
        with pytest.raises(TypeMismatchError, match="expected tags to be String\\[\\] but received list"):
            check_type("tags", ["a", 1], list[str])

    def test_oversized_int_rejected(self) -> None:
        with pytest.raises(TypeMismatchError, match="expected count to be Number but received int"):
            check_type("count", 2**63, int)

    def test_non_finite_float_is_a_number(self) -> None:
        """NaN and the infinities are Numbers; the serializer renders them as null."""
        check_type("score", float("nan"), float)
        check_type("score", float("inf"), PropType.NUMBER)

    def test_unsupported_value_reports_class_name(self) -> None:
        with pytest.raises(TypeMismatchError, match="received dict"):
            check_type("address", {"city": "London"}, str)

    def test_does_not_mutate_value(self) -> None:
        value = ["b", "a"]
        check_type("tags", value, list[str])

        assert value == ["b", "a"]

"""
Property type descriptors and runtime type checking.

A property descriptor (PropDef) is either:
- a bare type tag: a PropType member, or a Python class that resolves
  to one (str, int, float, bool, date, datetime, list[str], ...)
- an options record: SchemaTypeOpts (or a dict with a "type" key)
  carrying the tag plus constraints

Type checking compares kind tags, never Python classes, so int and float
are both Number while bool is only ever Boolean.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any, Union, get_args, get_origin

from neo4j.time import Date as Neo4jDate
from neo4j.time import DateTime as Neo4jDateTime
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from neo_ogm.graph.exceptions import SchemaDefinitionError, TypeMismatchError

# =============================================================================
# Type Tags
# =============================================================================


class PropType(Enum):
    """Closed set of property kinds a schema can declare.

    Values are the display names used in error messages.
    """

    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    DATE = "Date"
    STRING_LIST = "String[]"
    NUMBER_LIST = "Number[]"
    BOOLEAN_LIST = "Boolean[]"
    DATE_LIST = "Date[]"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def is_list(self) -> bool:
        return self in _ELEMENT_TYPES

    @property
    def element_type(self) -> PropType:
        """Kind of each element for list kinds; the kind itself otherwise."""
        return _ELEMENT_TYPES.get(self, self)

    def list_of(self) -> PropType:
        """Homogeneous list kind whose elements are of this kind."""
        if self.is_list:
            raise SchemaDefinitionError(f"Nested lists are not supported: {self.value}[]")
        return _LIST_TYPES[self]


_LIST_TYPES = {
    PropType.STRING: PropType.STRING_LIST,
    PropType.NUMBER: PropType.NUMBER_LIST,
    PropType.BOOLEAN: PropType.BOOLEAN_LIST,
    PropType.DATE: PropType.DATE_LIST,
}
_ELEMENT_TYPES = {list_type: scalar for scalar, list_type in _LIST_TYPES.items()}

_PYTHON_TYPES: dict[type, PropType] = {
    str: PropType.STRING,
    int: PropType.NUMBER,
    float: PropType.NUMBER,
    bool: PropType.BOOLEAN,
    date: PropType.DATE,
    datetime: PropType.DATE,
    Neo4jDate: PropType.DATE,
    Neo4jDateTime: PropType.DATE,
}

TEXT_TYPES = frozenset({PropType.STRING, PropType.STRING_LIST})

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

NeoScalar = Union[str, int, float, bool, date, Neo4jDate, Neo4jDateTime]
NeoType = Union[NeoScalar, list[NeoScalar]]
NeoProperties = dict[str, NeoType]


# =============================================================================
# Options Record
# =============================================================================


class SchemaTypeOpts(BaseModel):
    """Options record: a type tag plus optional constraints.

    The type field is always a bare tag; nesting another options
    record inside it is rejected when the record is built.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: PropType
    unique: bool = False
    required: bool = False
    index: bool = False
    lowercase: bool = False
    uppercase: bool = False
    enum: tuple[Any, ...] | None = None
    match: re.Pattern[str] | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _resolve_type(cls, value: Any) -> PropType:
        if is_schema_type_opts(value):
            raise ValueError("an options record cannot be used as the type of another")
        return _resolve_bare_type(value)

    @model_validator(mode="after")
    def _check_text_options(self) -> SchemaTypeOpts:
        if self.lowercase and self.uppercase:
            raise ValueError("lowercase and uppercase are mutually exclusive")
        text_only = self.lowercase or self.uppercase or self.match is not None
        if text_only and self.type not in TEXT_TYPES:
            raise ValueError(
                f"lowercase, uppercase and match apply to text, not {self.type.value}"
            )
        return self


PropDef = Union[PropType, SchemaTypeOpts, type, Mapping[str, Any]]


# =============================================================================
# Discriminator
# =============================================================================


def is_schema_type_opts(prop_def: Any) -> bool:
    """Return True iff prop_def is an options record rather than a bare tag."""
    if isinstance(prop_def, SchemaTypeOpts):
        return True
    return isinstance(prop_def, Mapping) and "type" in prop_def


def _resolve_bare_type(tag: Any) -> PropType:
    if isinstance(tag, PropType):
        return tag
    if isinstance(tag, type) and tag in _PYTHON_TYPES:
        return _PYTHON_TYPES[tag]

    if get_origin(tag) is list:
        args = get_args(tag)
        if len(args) == 1:
            return _resolve_bare_type(args[0]).list_of()

    if tag is list:
        raise ValueError("list descriptors must name an element type, e.g. list[str]")
    raise ValueError(f"unsupported property type {tag!r}")


def to_schema_type_opts(prop_def: Any, key: str | None = None) -> SchemaTypeOpts:
    """Build a SchemaTypeOpts from any options record.

    Raises:
        SchemaDefinitionError: If the record is malformed
    """
    if isinstance(prop_def, SchemaTypeOpts):
        return prop_def
    try:
        return SchemaTypeOpts.model_validate(dict(prop_def))
    except ValueError as e:
        raise SchemaDefinitionError(f"Invalid descriptor for {key}: {e}", key=key) from e


def resolve_prop_type(prop_def: Any, key: str | None = None) -> PropType:
    """Extract the bare type tag from any property descriptor.

    Args:
        prop_def: Bare tag, Python class, or options record
        key: Property key, used only for error messages

    Returns:
        The PropType the descriptor declares

    Raises:
        SchemaDefinitionError: If the descriptor cannot be resolved
    """
    if is_schema_type_opts(prop_def):
        return to_schema_type_opts(prop_def, key).type
    try:
        return _resolve_bare_type(prop_def)
    except ValueError as e:
        raise SchemaDefinitionError(f"Invalid descriptor for {key}: {e}", key=key) from e


# =============================================================================
# Runtime Type Checker
# =============================================================================


def _scalar_kind(value: Any) -> PropType | None:
    # bool before int: bool subclasses int
    if isinstance(value, bool):
        return PropType.BOOLEAN
    if isinstance(value, int):
        # Cypher integers are signed 64-bit
        return PropType.NUMBER if INT64_MIN <= value <= INT64_MAX else None
    if isinstance(value, float):
        return PropType.NUMBER
    if isinstance(value, str):
        return PropType.STRING
    if isinstance(value, (date, Neo4jDate, Neo4jDateTime)):
        return PropType.DATE
    return None


def kind_of(value: Any) -> PropType | None:
    """Return the kind tag of a runtime value.

    Returns None for unsupported values, mixed lists, empty lists and
    integers outside the signed 64-bit range.
    """
    scalar = _scalar_kind(value)
    if scalar is not None:
        return scalar
    if isinstance(value, (list, tuple)):
        kinds = {_scalar_kind(item) for item in value}
        if len(kinds) == 1 and None not in kinds:
            return kinds.pop().list_of()
    return None


def check_type(key: str, value: Any, prop_def: Any) -> None:
    """Verify that value's kind equals the kind prop_def declares.

    An empty list carries no element kind and satisfies any list kind.

    Raises:
        TypeMismatchError: If the kinds differ
        SchemaDefinitionError: If prop_def cannot be resolved
    """
    expected = resolve_prop_type(prop_def, key)
    actual = kind_of(value)
    if actual is expected:
        return
    if actual is None and expected.is_list and isinstance(value, (list, tuple)) and not value:
        return

    actual_name = actual.display_name if actual is not None else type(value).__name__
    raise TypeMismatchError(key, expected.display_name, actual_name)

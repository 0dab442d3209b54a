"""
Property marshalling between Python and the Cypher wire shapes.

- to_query_props: property bag -> Cypher property-map literal
- create_props: positional result record -> property bag

Output literal shape:
    {}                          for an empty bag
    { name: "Ada", age: 30 }    otherwise, values JSON encoded
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from neo4j.time import Date as Neo4jDate
from neo4j.time import DateTime as Neo4jDateTime

from neo_ogm.core.config import get_settings
from neo_ogm.graph.exceptions import MalformedRecordError
from neo_ogm.graph.types import NeoProperties

logger = logging.getLogger(__name__)

EMPTY_PROPS = "{}"
PAIR_SEPARATOR = ", "

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


# =============================================================================
# Serializer
# =============================================================================


def _encode_default(value: Any) -> str:
    """JSON fallback for temporal values, rendered as ISO-8601 strings."""
    if isinstance(value, (Neo4jDate, Neo4jDateTime)):
        return value.iso_format()
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _null_non_finite(value: Any) -> Any:
    """Replace NaN and the infinities with None, as JSON.stringify does."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (list, tuple)):
        return [_null_non_finite(item) for item in value]
    return value


def to_json_literal(value: Any) -> str:
    """Encode a value the way JavaScript's JSON.stringify does."""
    return json.dumps(
        _null_non_finite(value),
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
        default=_encode_default,
    )


def quote_key(key: str) -> str:
    """Backtick-quote keys that are not plain Cypher identifiers."""
    if _IDENTIFIER.fullmatch(key):
        return key
    return "`" + key.replace("`", "``") + "`"


def to_query_props(props: Mapping[str, Any]) -> str:
    """Render a property bag as a Cypher property-map literal.

    Keys appear in the mapping's iteration order. Values are not
    type-checked here; run Schema.validate first.

    Args:
        props: Property bag to render

    Returns:
        "{}" when props is empty, otherwise "{ k1: v1, k2: v2 }"
    """
    if not props:
        return EMPTY_PROPS

    pairs = [f"{quote_key(key)}: {to_json_literal(value)}" for key, value in props.items()]
    logger.debug("Serialized %d properties", len(pairs))
    return "{ " + PAIR_SEPARATOR.join(pairs) + " }"


# =============================================================================
# Deserializer
# =============================================================================


@dataclass(frozen=True)
class NeoRecord:
    """One row of a query result in positional form.

    Attributes:
        keys: Column names, in result order
        fields: Values aligned index-for-index with keys
        field_lookup: Column name to index; not used by create_props
    """

    keys: Sequence[str]
    fields: Sequence[Any]
    field_lookup: Mapping[str, int] = field(default_factory=dict)

    @property
    def length(self) -> int:
        return len(self.keys)

    @classmethod
    def from_driver_record(cls, record: Any) -> NeoRecord:
        """Adapt a neo4j.Record (anything with keys() and values())."""
        keys = list(record.keys())
        return cls(
            keys=keys,
            fields=list(record.values()),
            field_lookup={key: i for i, key in enumerate(keys)},
        )


def create_props(record: Any, strict: bool | None = None) -> NeoProperties:
    """Rebuild a property bag from a positional result record.

    Duplicate keys resolve last-write-wins.

    Args:
        record: NeoRecord, or a driver record adapted via from_driver_record
        strict: Raise on misaligned records; defaults to the
                NEO_OGM_STRICT_RECORDS setting

    Returns:
        Dict mapping each key to its positional field

    Raises:
        MalformedRecordError: If strict and len(keys) != len(fields)
    """
    if strict is None:
        strict = get_settings().strict_records
    if not isinstance(record, NeoRecord):
        record = NeoRecord.from_driver_record(record)

    keys, fields = record.keys, record.fields
    if len(keys) != len(fields):
        if strict:
            raise MalformedRecordError(len(keys), len(fields))
        logger.warning(
            "Record has %d keys but %d fields, truncating to the shorter",
            len(keys),
            len(fields),
        )

    props: NeoProperties = {}
    for key, value in zip(keys, fields):
        props[key] = value

    logger.debug("Deserialized record with %d keys", len(props))
    return props

"""
Schema declarations for node and relationship properties.

Provides:
- Schema: normalized, read-only mapping of property key to descriptor
- Derived key lists (indexes, unique_props, required_props)
- validate(): type checks and constraint checks for a property bag

Design follows:
- Descriptors are normalized once, when the schema is declared
- Unique/index flags are recorded only; enforcing them is the database's job
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from neo_ogm.graph.exceptions import SchemaValidationError
from neo_ogm.graph.types import (
    NeoProperties,
    PropType,
    SchemaTypeOpts,
    check_type,
    is_schema_type_opts,
    resolve_prop_type,
    to_schema_type_opts,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Schema Class
# =============================================================================


class Schema:
    """Declared property shapes for one model.

    Usage:
        schema = Schema({
            "name": {"type": str, "required": True, "index": True},
            "email": {"type": str, "unique": True, "lowercase": True},
            "age": int,
            "tags": list[str],
        })
        props = schema.validate({"name": "Ada", "email": "ADA@example.com"})
    """

    def __init__(self, properties: Mapping[str, Any]) -> None:
        """Normalize every descriptor in properties.

        Args:
            properties: Property key to descriptor (tag, class or options record)

        Raises:
            SchemaDefinitionError: If any descriptor cannot be resolved
        """
        normalized: dict[str, PropType | SchemaTypeOpts] = {}
        for key, prop_def in properties.items():
            if is_schema_type_opts(prop_def):
                normalized[key] = to_schema_type_opts(prop_def, key)
            else:
                normalized[key] = resolve_prop_type(prop_def, key)
        self._properties = MappingProxyType(normalized)

        self.indexes = self._keys_with("index")
        self.unique_props = self._keys_with("unique")
        self.required_props = self._keys_with("required")

    def _keys_with(self, flag: str) -> tuple[str, ...]:
        return tuple(
            key
            for key, prop_def in self._properties.items()
            if isinstance(prop_def, SchemaTypeOpts) and getattr(prop_def, flag)
        )

    @property
    def properties(self) -> Mapping[str, PropType | SchemaTypeOpts]:
        """Read-only view of the normalized descriptors."""
        return self._properties

    @property
    def indexed(self) -> bool:
        return bool(self.indexes)

    def prop_type(self, key: str) -> PropType:
        """Return the declared kind of a property."""
        return resolve_prop_type(self._properties[key], key)

    def __contains__(self, key: object) -> bool:
        return key in self._properties

    def __repr__(self) -> str:
        return f"Schema({list(self._properties)!r})"

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(self, props: Mapping[str, Any]) -> NeoProperties:
        """Check a property bag against this schema.

        Keys whose value is None are treated as absent and dropped.
        Text values are case-normalized where the schema asks for it.
        The input mapping is never mutated.

        Args:
            props: Property bag to validate

        Returns:
            New normalized property bag

        Raises:
            SchemaValidationError: Unknown key, missing required key,
                enum or match violation
            TypeMismatchError: A value's kind differs from its declaration
        """
        result: NeoProperties = {}
        for key, value in props.items():
            if key not in self._properties:
                raise SchemaValidationError(f"Property {key} is not declared in the schema", key=key)
            if value is None:
                continue

            prop_def = self._properties[key]
            check_type(key, value, prop_def)
            if isinstance(prop_def, SchemaTypeOpts):
                value = self._apply_options(key, value, prop_def)
            result[key] = value

        missing = [key for key in self.required_props if key not in result]
        if missing:
            raise SchemaValidationError(
                f"Missing required properties: {', '.join(missing)}",
                key=missing[0],
            )

        logger.debug("Validated %d properties", len(result))
        return result

    def _apply_options(self, key: str, value: Any, opts: SchemaTypeOpts) -> Any:
        is_list = opts.type.is_list
        items = list(value) if is_list else [value]

        if opts.lowercase:
            items = [item.lower() for item in items]
        elif opts.uppercase:
            items = [item.upper() for item in items]

        for item in items:
            if opts.enum is not None and item not in opts.enum:
                raise SchemaValidationError(
                    f"Property {key} must be one of {list(opts.enum)!r}, got {item!r}",
                    key=key,
                )
            if opts.match is not None and not opts.match.fullmatch(item):
                raise SchemaValidationError(
                    f"Property {key} does not match pattern {opts.match.pattern!r}: {item!r}",
                    key=key,
                )

        return items if is_list else items[0]

"""
Base class for declaring graph node models.

A model binds a label to a Schema and marshals its properties:

    class Person(NodeModel):
        label = "Person"
        schema = Schema({"name": {"type": str, "required": True}, "age": int})

    ada = Person({"name": "Ada", "age": 36})
    ada.to_query_props()            # '{ name: "Ada", age: 36 }'
    Person.from_record(record)      # rebuilt from a query result row

Saving, relationship traversal and hooks belong to the driver layer.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from neo_ogm.graph.exceptions import SchemaDefinitionError
from neo_ogm.graph.props import create_props, to_query_props
from neo_ogm.graph.schema import Schema
from neo_ogm.graph.types import NeoProperties

INSTANCE_ATTRIBUTES = frozenset({"properties", "uid"})


class NodeModel:
    """Validated property holder for one node."""

    label: ClassVar[str]
    schema: ClassVar[Schema]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Reject schema keys that would be shadowed by model attributes."""
        super().__init_subclass__(**kwargs)
        schema = cls.__dict__.get("schema")
        if schema is None:
            return
        shadowed = [
            key for key in schema.properties if key in INSTANCE_ATTRIBUTES or hasattr(cls, key)
        ]
        if shadowed:
            raise SchemaDefinitionError(
                f"{cls.__name__} schema uses reserved model attribute names: {', '.join(shadowed)}",
                key=shadowed[0],
            )

    def __init__(self, properties: Mapping[str, Any], uid: str | int | None = None) -> None:
        """Validate properties against the model schema.

        Args:
            properties: Property bag for the node
            uid: Database id of the node, when it was loaded

        Raises:
            SchemaValidationError: If a constraint is violated
            TypeMismatchError: If a value has the wrong kind
        """
        self.properties: NeoProperties = self.schema.validate(properties)
        self.uid = uid

    @classmethod
    def from_record(
        cls,
        record: Any,
        uid: str | int | None = None,
        strict: bool | None = None,
    ) -> NodeModel:
        """Build a model from a NeoRecord or driver record."""
        return cls(create_props(record, strict=strict), uid=uid)

    def to_query_props(self) -> str:
        return to_query_props(self.properties)

    def __getattr__(self, name: str) -> Any:
        properties = self.__dict__.get("properties", {})
        if name in properties:
            return properties[name]
        raise AttributeError(f"{type(self).__name__} has no property {name!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeModel):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.uid == other.uid
            and self.properties == other.properties
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(uid={self.uid!r}, properties={self.properties!r})"

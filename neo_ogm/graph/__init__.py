# Graph module for property marshalling
"""
Graph layer for schema-driven property marshalling including:
- PropType / SchemaTypeOpts: Property type descriptors
- check_type / is_schema_type_opts: Runtime type checking primitives
- to_query_props / create_props: Cypher property-map and record conversion
- Schema / NodeModel: Schema declarations and validated node models
"""

from neo_ogm.graph.exceptions import (
    GraphModelError,
    MalformedRecordError,
    SchemaDefinitionError,
    SchemaValidationError,
    TypeMismatchError,
)
from neo_ogm.graph.model import NodeModel
from neo_ogm.graph.props import (
    NeoRecord,
    create_props,
    to_query_props,
)
from neo_ogm.graph.schema import Schema
from neo_ogm.graph.types import (
    NeoProperties,
    NeoType,
    PropDef,
    PropType,
    SchemaTypeOpts,
    check_type,
    is_schema_type_opts,
    kind_of,
    resolve_prop_type,
)

__all__ = [
    # Exceptions
    "GraphModelError",
    "MalformedRecordError",
    "SchemaDefinitionError",
    "SchemaValidationError",
    "TypeMismatchError",
    # Types
    "NeoProperties",
    "NeoType",
    "PropDef",
    "PropType",
    "SchemaTypeOpts",
    "check_type",
    "is_schema_type_opts",
    "kind_of",
    "resolve_prop_type",
    # Marshalling
    "NeoRecord",
    "create_props",
    "to_query_props",
    # Schema
    "NodeModel",
    "Schema",
]

"""
neo-ogm: schema validation and property marshalling for Neo4j.
"""

from neo_ogm.graph import (
    NeoRecord,
    NodeModel,
    PropType,
    Schema,
    SchemaTypeOpts,
    check_type,
    create_props,
    is_schema_type_opts,
    to_query_props,
)

__version__ = "0.1.0"

__all__ = [
    "NeoRecord",
    "NodeModel",
    "PropType",
    "Schema",
    "SchemaTypeOpts",
    "check_type",
    "create_props",
    "is_schema_type_opts",
    "to_query_props",
]

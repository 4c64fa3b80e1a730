"""
Graph module - Type records, relation index and closure queries.

This module builds the relationship graph over scanned types
(superclasses, interfaces, tags and meta-tags, member signatures)
and answers transitive queries over it.
"""

from .records import (
    TypeKind,
    TagUsage,
    ParameterInfo,
    AttributeInfo,
    RoutineInfo,
    TypeRecord,
)

from .relationships import (
    RelationType,
    Relationship,
)

from .base_graph_store import BaseGraphStore
from .networkx_store import NetworkXStore

from .relation_index import RelationIndex
from .closure_queries import ClosureQueries

from .class_graph import (
    ClassGraph,
    build_class_graph,
)

__all__ = [
    # Records
    "TypeKind",
    "TagUsage",
    "ParameterInfo",
    "AttributeInfo",
    "RoutineInfo",
    "TypeRecord",
    # Relationships
    "RelationType",
    "Relationship",
    # Stores
    "BaseGraphStore",
    "NetworkXStore",
    # Index and queries
    "RelationIndex",
    "ClosureQueries",
    # Graph
    "ClassGraph",
    "build_class_graph",
]

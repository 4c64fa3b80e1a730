"""
classgraph - relationship graph over scanned class, interface and
annotation types, with transitive queries and Graphviz export.

Usage:
    from classgraph import build_class_graph

    graph = build_class_graph(records)
    graph.get_names_of_subclasses_of("com.example.Animal")
    dot = graph.generate_dot(width=20, height=20)
"""

from .config import GraphConfig

from .graph import (
    TypeKind,
    TagUsage,
    ParameterInfo,
    AttributeInfo,
    RoutineInfo,
    TypeRecord,
    RelationType,
    Relationship,
    RelationIndex,
    ClosureQueries,
    ClassGraph,
    build_class_graph,
)

from .export import (
    DiagramExporter,
    EdgeStyle,
    EDGE_STYLES,
    NODE_STYLES,
    darken_color,
)

__all__ = [
    "GraphConfig",
    "TypeKind",
    "TagUsage",
    "ParameterInfo",
    "AttributeInfo",
    "RoutineInfo",
    "TypeRecord",
    "RelationType",
    "Relationship",
    "RelationIndex",
    "ClosureQueries",
    "ClassGraph",
    "build_class_graph",
    "DiagramExporter",
    "EdgeStyle",
    "EDGE_STYLES",
    "NODE_STYLES",
    "darken_color",
]

"""
Relationship types and models for the class graph.

This module defines the relation kinds that can exist between
discovered types. Every edge points from the type that declares the
relation to the type it refers to.
"""

from dataclasses import dataclass
from enum import Enum


class RelationType(Enum):
    """
    Types of relationships between discovered types.

    These represent the edges in the class graph.
    """

    # === Hierarchy ===
    EXTENDS = "EXTENDS"                         # Class -> direct superclass
    IMPLEMENTS = "IMPLEMENTS"                   # Class -> implemented interface
    EXTENDS_INTERFACE = "EXTENDS_INTERFACE"     # Interface -> superinterface

    # === Tagging ===
    TAGGED_BY = "TAGGED_BY"                     # Class/interface -> tag
    META_TAGGED_BY = "META_TAGGED_BY"           # Tag -> meta-tag
    ROUTINE_TAGGED_BY = "ROUTINE_TAGGED_BY"     # Type with a tagged routine -> tag
    ATTRIBUTE_TAGGED_BY = "ATTRIBUTE_TAGGED_BY" # Type with a tagged attribute -> tag

    # === Type references in member signatures ===
    ATTRIBUTE_REFERENCES = "ATTRIBUTE_REFERENCES"  # Type -> type used by an attribute
    ROUTINE_REFERENCES = "ROUTINE_REFERENCES"      # Type -> type used by a routine


TAG_RELATIONS = frozenset({
    RelationType.TAGGED_BY,
    RelationType.META_TAGGED_BY,
})


@dataclass(frozen=True)
class Relationship:
    """
    A relationship (edge) between two discovered types.

    Attributes:
        source: Name of the type declaring the relation
        target: Name of the type it refers to
        rel_type: Type of relationship
    """
    source: str
    target: str
    rel_type: RelationType


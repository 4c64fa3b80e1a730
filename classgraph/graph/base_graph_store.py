"""
Abstract base class for relation stores.

Defines the contract a graph backend must follow to hold the class
graph: named nodes and directed edges keyed by RelationType. Two types
may be linked by several relations at once (a class can both carry a
tag and declare a member carrying it), so edges are identified by
(source, target, relation).
"""

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, List, Set

from .relationships import Relationship, RelationType


class BaseGraphStore(ABC):
    """
    Abstract relation store interface.

    Traversal methods take the set of relation types to follow; edges of
    any other type are invisible to that call.
    """

    # ─────────────────────────────────────────────
    # Node Operations
    # ─────────────────────────────────────────────

    @abstractmethod
    def add_node(self, node_id: str, **attrs) -> None:
        """Add a node with optional attributes."""
        ...

    @abstractmethod
    def number_of_nodes(self) -> int:
        """Return total number of nodes."""
        ...

    # ─────────────────────────────────────────────
    # Edge Operations
    # ─────────────────────────────────────────────

    @abstractmethod
    def add_edge(self, source: str, target: str, relation: RelationType) -> None:
        """Add a directed edge of the given relation type. Re-adding is a no-op."""
        ...

    @abstractmethod
    def has_edge(self, source: str, target: str, relation: RelationType) -> bool:
        """Check if an edge of the given relation type exists."""
        ...

    @abstractmethod
    def edges(self, relations: Iterable[RelationType]) -> Iterator[Relationship]:
        """Iterate every edge of the given relation types."""
        ...

    @abstractmethod
    def number_of_edges(self, relation: RelationType = None) -> int:
        """Return number of edges, optionally of a single relation type."""
        ...

    # ─────────────────────────────────────────────
    # Traversal
    # ─────────────────────────────────────────────

    @abstractmethod
    def predecessors(self, node_id: str, relations: Iterable[RelationType]) -> List[str]:
        """Direct predecessors over the given relation types. [] if node not found."""
        ...

    @abstractmethod
    def successors(self, node_id: str, relations: Iterable[RelationType]) -> List[str]:
        """Direct successors over the given relation types. [] if node not found."""
        ...

    @abstractmethod
    def ancestors(self, node_id: str, relations: Iterable[RelationType]) -> Set[str]:
        """All transitive predecessors, excluding node_id. set() if node not found."""
        ...

    @abstractmethod
    def descendants(self, node_id: str, relations: Iterable[RelationType]) -> Set[str]:
        """All transitive successors, excluding node_id. set() if node not found."""
        ...

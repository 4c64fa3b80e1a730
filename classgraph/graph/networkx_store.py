"""
NetworkX implementation of the relation store.

Wraps a NetworkX MultiDiGraph behind the BaseGraphStore interface. Edge
keys are RelationType values, so a relation-filtered traversal is a
subgraph view over the matching keys.
"""

from typing import FrozenSet, Iterable, Iterator, List, Set

import networkx as nx

from .base_graph_store import BaseGraphStore
from .relationships import Relationship, RelationType


def _keys(relations: Iterable[RelationType]) -> FrozenSet[str]:
    return frozenset(r.value for r in relations)


class NetworkXStore(BaseGraphStore):
    """Relation store backed by NetworkX (in-memory directed multigraph)."""

    def __init__(self):
        self._graph = nx.MultiDiGraph()

    def _view(self, relations: Iterable[RelationType]) -> nx.MultiDiGraph:
        keys = _keys(relations)
        return nx.subgraph_view(self._graph, filter_edge=lambda u, v, k: k in keys)

    # ─── Node Operations ──────────────────────────

    def add_node(self, node_id: str, **attrs) -> None:
        self._graph.add_node(node_id, **attrs)

    def number_of_nodes(self) -> int:
        return self._graph.number_of_nodes()

    # ─── Edge Operations ──────────────────────────

    def add_edge(self, source: str, target: str, relation: RelationType) -> None:
        self._graph.add_edge(source, target, key=relation.value)

    def has_edge(self, source: str, target: str, relation: RelationType) -> bool:
        return self._graph.has_edge(source, target, key=relation.value)

    def edges(self, relations: Iterable[RelationType]) -> Iterator[Relationship]:
        keys = _keys(relations)
        for source, target, key in self._graph.edges(keys=True):
            if key in keys:
                yield Relationship(source, target, RelationType(key))

    def number_of_edges(self, relation: RelationType = None) -> int:
        if relation is None:
            return self._graph.number_of_edges()
        return sum(1 for _ in self.edges([relation]))

    # ─── Traversal ────────────────────────────────

    def predecessors(self, node_id: str, relations: Iterable[RelationType]) -> List[str]:
        if node_id not in self._graph:
            return []
        return list(self._view(relations).predecessors(node_id))

    def successors(self, node_id: str, relations: Iterable[RelationType]) -> List[str]:
        if node_id not in self._graph:
            return []
        return list(self._view(relations).successors(node_id))

    def ancestors(self, node_id: str, relations: Iterable[RelationType]) -> Set[str]:
        if node_id not in self._graph:
            return set()
        found = nx.ancestors(self._view(relations), node_id)
        found.discard(node_id)
        return found

    def descendants(self, node_id: str, relations: Iterable[RelationType]) -> Set[str]:
        if node_id not in self._graph:
            return set()
        found = nx.descendants(self._view(relations), node_id)
        found.discard(node_id)
        return found

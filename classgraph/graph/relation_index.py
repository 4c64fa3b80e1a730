"""
Relation index over discovered types.

RelationIndex owns the name -> TypeRecord mapping and the relation
store built from it. Construction runs a single linking pass: every
direct relation a record declares (and every inverse relation it was
pre-seeded with) becomes an edge between two known records, then every
record's relation sets are rewritten from the store so each inverse
pair agrees. After construction the records are read-only.
"""

import dataclasses
from typing import Dict, Iterable, Optional, Set, Tuple

from classgraph.config import GraphConfig
from .base_graph_store import BaseGraphStore
from .networkx_store import NetworkXStore
from .records import TypeRecord
from .relationships import RelationType


class RelationIndex:
    """
    Name-keyed index of TypeRecords plus the typed relation graph.

    Records may arrive in any order and may reference types that were
    never scanned. References to unknown names are dropped from the graph
    (and counted in dangling_references) rather than raised.
    """

    def __init__(self, records: Dict[str, TypeRecord], config: Optional[GraphConfig] = None):
        self.config = config or GraphConfig.from_env()
        # Linking rewrites relation sets, so the index works on its own copies
        self._records: Dict[str, TypeRecord] = {
            name: dataclasses.replace(record) for name, record in records.items()
        }
        self.store: BaseGraphStore = NetworkXStore()
        self._names_to_origins: Dict[str, Tuple[str, ...]] = {}
        self.dangling_references = 0
        self.conflicts = 0
        self._link()

    @classmethod
    def build(cls, records: Dict[str, TypeRecord], config: Optional[GraphConfig] = None) -> "RelationIndex":
        """Wire cross-references between records and return the index."""
        return cls(records, config)

    # ─── Lookup ───────────────────────────────────

    def __contains__(self, name: str) -> bool:
        return name in self._records

    def __len__(self) -> int:
        return len(self._records)

    def get(self, name: str) -> Optional[TypeRecord]:
        """Look up a record by name, regardless of external filtering."""
        return self._records.get(name)

    @property
    def names_to_origins(self) -> Dict[str, Tuple[str, ...]]:
        """Map from type name to the origin identifiers that produced it (non-empty only)."""
        return dict(self._names_to_origins)

    def _include_external(self, include_external: Optional[bool]) -> bool:
        if include_external is None:
            return self.config.enable_external_classes
        return include_external

    def records_by_name(self, include_external: Optional[bool] = None) -> Dict[str, TypeRecord]:
        """
        Get a fresh name -> record mapping.

        Args:
            include_external: When False, records flagged external are left
                out (strict whitelist). Defaults to the config setting.
        """
        if self._include_external(include_external):
            return dict(self._records)
        return {name: rec for name, rec in self._records.items() if not rec.is_external}

    def all_records(self, include_external: Optional[bool] = None) -> Set[TypeRecord]:
        """Get the set of records, filtered like records_by_name()."""
        return set(self.records_by_name(include_external).values())

    def is_listable(self, name: str, include_external: Optional[bool] = None) -> bool:
        """True if name may appear in a listing: known, not the root type, and visible."""
        record = self._records.get(name)
        if record is None or name == self.config.root_type_name:
            return False
        return self._include_external(include_external) or not record.is_external

    # ─── Linking ──────────────────────────────────

    def _link(self):
        for name, record in self._records.items():
            self.store.add_node(name, kind=record.kind.value, external=record.is_external)
            if record.origins:
                self._names_to_origins[name] = tuple(record.origins)

        for name, record in self._records.items():
            self._link_record(name, record)

        for name, record in self._records.items():
            self._apply_relations(name, record)

        if self.config.verbose:
            print(
                f"[RelationIndex] Linked {len(self._records)} types, "
                f"{self.store.number_of_edges()} relations "
                f"({self.dangling_references} dangling references ignored)"
            )

    def _add(self, source: str, target: str, relation: RelationType, quiet: bool = False) -> bool:
        if source not in self._records or target not in self._records:
            if not quiet:
                self.dangling_references += 1
                if self.config.verbose:
                    print(f"  [DANGLING] {source} -{relation.value}-> {target}")
            return False
        self.store.add_edge(source, target, relation)
        return True

    def _add_all(self, source: str, targets: Iterable[str], relation: RelationType, quiet: bool = False):
        for target in targets:
            self._add(source, target, relation, quiet=quiet)

    def _tag_relation(self, name: str) -> RelationType:
        record = self._records.get(name)
        if record is not None and record.is_tag:
            return RelationType.META_TAGGED_BY
        return RelationType.TAGGED_BY

    def _link_record(self, name: str, record: TypeRecord):
        # Class hierarchy
        if record.direct_superclass and not record.is_interface and not record.is_tag:
            self._add(name, record.direct_superclass, RelationType.EXTENDS)
        for sub_name in record.direct_subclasses:
            sub = self._records.get(sub_name)
            if sub is not None and sub.direct_superclass not in (None, name):
                # The subclass's own declaration wins
                self.conflicts += 1
                if self.config.verbose:
                    print(f"  [CONFLICT] {sub_name} declares superclass {sub.direct_superclass}, not {name}")
                continue
            self._add(sub_name, name, RelationType.EXTENDS)

        # Interfaces
        self._add_all(name, record.directly_implemented_interfaces, RelationType.IMPLEMENTS)
        for class_name in record.implementing_classes:
            self._add(class_name, name, RelationType.IMPLEMENTS)
        self._add_all(name, record.direct_superinterfaces, RelationType.EXTENDS_INTERFACE)
        for sub_name in record.direct_subinterfaces:
            self._add(sub_name, name, RelationType.EXTENDS_INTERFACE)

        # Tags and meta-tags
        self._add_all(name, record.declared_tag_names(), self._tag_relation(name))
        for tagged_name in record.tagged_types:
            self._add(tagged_name, name, self._tag_relation(tagged_name))
        for tagged_name in record.types_with_this_as_meta_tag:
            self._add(tagged_name, name, self._tag_relation(tagged_name))

        # Member-level tags. Tags that were never scanned are normal here.
        self._add_all(name, record.attribute_tag_names, RelationType.ATTRIBUTE_TAGGED_BY, quiet=True)
        self._add_all(name, record.routine_tag_names, RelationType.ROUTINE_TAGGED_BY, quiet=True)

        # Signature references (primitives and unscanned types are skipped)
        self._add_all(name, record.referenced_type_names_in_attributes(),
                      RelationType.ATTRIBUTE_REFERENCES, quiet=True)
        self._add_all(name, record.referenced_type_names_in_routines(),
                      RelationType.ROUTINE_REFERENCES, quiet=True)

    def _apply_relations(self, name: str, record: TypeRecord):
        """Rewrite the record's relation sets from the store, then freeze them."""
        def succ(*relations):
            return frozenset(self.store.successors(name, relations))

        def pred(*relations):
            return frozenset(self.store.predecessors(name, relations))

        superclasses = sorted(succ(RelationType.EXTENDS))
        if superclasses:
            if len(superclasses) > 1:
                self.conflicts += 1
                if self.config.verbose:
                    print(f"  [CONFLICT] {name} has several superclasses: {', '.join(superclasses)}")
            record.direct_superclass = superclasses[0]
        else:
            record.direct_superclass = None
        record.direct_subclasses = pred(RelationType.EXTENDS)

        record.directly_implemented_interfaces = (
            frozenset(record.directly_implemented_interfaces) | succ(RelationType.IMPLEMENTS)
        )
        record.implementing_classes = pred(RelationType.IMPLEMENTS)
        record.direct_superinterfaces = (
            frozenset(record.direct_superinterfaces) | succ(RelationType.EXTENDS_INTERFACE)
        )
        record.direct_subinterfaces = pred(RelationType.EXTENDS_INTERFACE)

        tags = frozenset(record.declared_tag_names()) | succ(RelationType.TAGGED_BY, RelationType.META_TAGGED_BY)
        record.direct_tags = tags
        record.direct_meta_tags = tags if record.is_tag else frozenset()
        record.tagged_types = pred(RelationType.TAGGED_BY)
        record.types_with_this_as_meta_tag = pred(RelationType.META_TAGGED_BY)

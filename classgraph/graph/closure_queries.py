"""
Transitive relationship queries over a RelationIndex.

Every query returns a sorted, duplicate-free list of type names. Unknown
names yield an empty list. The root type and (in strict whitelist mode)
external types are never listed. Traversals are visited-set BFS, so they
terminate and deduplicate even over cyclic data.
"""

from typing import Callable, Iterable, List, Set

from .records import TypeKind, TypeRecord
from .relation_index import RelationIndex
from .relationships import RelationType, TAG_RELATIONS


class ClosureQueries:
    """Stateless query algorithms over a built RelationIndex."""

    def __init__(self, index: RelationIndex):
        self.index = index
        self.store = index.store

    # ─── Helpers ──────────────────────────────────

    def _sorted_names(self, names: Iterable[str]) -> List[str]:
        return sorted({n for n in names if self.index.is_listable(n)})

    def _names_of_kind(self, accept: Callable[[TypeRecord], bool]) -> List[str]:
        return self._sorted_names(
            name for name, record in self.index.records_by_name().items() if accept(record)
        )

    def _descendants(self, name: str, *relations: RelationType) -> Set[str]:
        return self.store.descendants(name, relations)

    def _ancestors(self, name: str, *relations: RelationType) -> Set[str]:
        return self.store.ancestors(name, relations)

    # ─── Listings by kind ─────────────────────────

    def names_of_all_types(self) -> List[str]:
        """Names of all standard types, interfaces and tags."""
        return self._names_of_kind(lambda r: True)

    def names_of_all_standard_types(self) -> List[str]:
        return self._names_of_kind(lambda r: r.kind is TypeKind.STANDARD)

    def names_of_all_interface_types(self) -> List[str]:
        return self._names_of_kind(lambda r: r.kind is TypeKind.INTERFACE)

    def names_of_all_tag_types(self) -> List[str]:
        return self._names_of_kind(lambda r: r.kind is TypeKind.TAG)

    # ─── Class hierarchy ──────────────────────────

    def names_of_subclasses_of(self, name: str) -> List[str]:
        """All direct and indirect subclasses of the named class."""
        return self._sorted_names(self._ancestors(name, RelationType.EXTENDS) - {name})

    def names_of_superclasses_of(self, name: str) -> List[str]:
        """All direct and indirect superclasses of the named class, root type excluded."""
        return self._sorted_names(self._descendants(name, RelationType.EXTENDS) - {name})

    # ─── Interfaces ───────────────────────────────

    def names_of_subinterfaces_of(self, name: str) -> List[str]:
        return self._sorted_names(self._ancestors(name, RelationType.EXTENDS_INTERFACE) - {name})

    def names_of_superinterfaces_of(self, name: str) -> List[str]:
        return self._sorted_names(self._descendants(name, RelationType.EXTENDS_INTERFACE) - {name})

    def names_of_classes_implementing(self, name: str) -> List[str]:
        """
        Classes implementing the named interface, directly or not.

        A class implements I if it directly implements I or any
        subinterface of I. Every subclass of such a class implements I
        as well.
        """
        if name not in self.index:
            return []
        interfaces = self._ancestors(name, RelationType.EXTENDS_INTERFACE) | {name}
        implementing: Set[str] = set()
        for interface in interfaces:
            implementing.update(self.store.predecessors(interface, [RelationType.IMPLEMENTS]))
        for class_name in list(implementing):
            implementing |= self._ancestors(class_name, RelationType.EXTENDS)
        implementing -= interfaces
        return self._sorted_names(implementing)

    # ─── Tags ─────────────────────────────────────

    def names_of_types_with_tag(self, tag_name: str) -> List[str]:
        """
        Standard types and interfaces carrying the named tag.

        A type carries T if it carries T directly, or carries a tag that
        has T as a (transitive) meta-tag.
        """
        if tag_name not in self.index:
            return []
        tags = self._ancestors(tag_name, RelationType.META_TAGGED_BY) | {tag_name}
        tagged: Set[str] = set()
        for tag in tags:
            tagged.update(self.store.predecessors(tag, [RelationType.TAGGED_BY]))
        return self._sorted_names(tagged)

    def names_of_tags_on_type(self, type_name: str) -> List[str]:
        """Tags on the named type, plus all their meta-tags."""
        return self._sorted_names(self._descendants(type_name, *TAG_RELATIONS) - {type_name})

    def names_of_meta_tags_on_tag(self, tag_name: str) -> List[str]:
        """Meta-tags on the named tag, direct and transitive."""
        return self._sorted_names(self._descendants(tag_name, RelationType.META_TAGGED_BY) - {tag_name})

    def names_of_tags_with_meta_tag(self, meta_tag_name: str) -> List[str]:
        """Tags carrying the named meta-tag, direct and transitive."""
        return self._sorted_names(self._ancestors(meta_tag_name, RelationType.META_TAGGED_BY) - {meta_tag_name})

    # ─── Member tags (direct only) ────────────────

    def names_of_types_with_routine_tag(self, tag_name: str) -> List[str]:
        """Types declaring at least one routine carrying the named tag."""
        return self._sorted_names(
            r.name for r in self.index.all_records() if tag_name in r.routine_tag_names
        )

    def names_of_types_with_attribute_tag(self, tag_name: str) -> List[str]:
        """Types declaring at least one attribute carrying the named tag."""
        return self._sorted_names(
            r.name for r in self.index.all_records() if tag_name in r.attribute_tag_names
        )

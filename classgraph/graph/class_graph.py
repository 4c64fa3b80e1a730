"""
Class graph construction and querying.

ClassGraph bundles the three layers a caller usually needs together:
the RelationIndex built from scanned records, the closure queries over
it, and the Graphviz exporter.
"""

from typing import Any, Dict, Iterable, List, Optional

from classgraph.config import GraphConfig
from classgraph.export.dot_exporter import DiagramExporter
from .closure_queries import ClosureQueries
from .records import TypeKind, TypeRecord
from .relation_index import RelationIndex
from .relationships import RelationType


class ClassGraph:
    """
    Relationship graph over a closed population of scanned types.

    Build once, then query as often as needed; nothing is mutated after
    construction.
    """

    def __init__(self, records: Dict[str, TypeRecord], config: Optional[GraphConfig] = None):
        self.index = RelationIndex.build(records, config)
        self.config = self.index.config
        self.queries = ClosureQueries(self.index)
        self.exporter = DiagramExporter(self.index)

    # ─── Listings ─────────────────────────────────

    def get_names_of_all_classes(self) -> List[str]:
        return self.queries.names_of_all_types()

    def get_names_of_all_standard_classes(self) -> List[str]:
        return self.queries.names_of_all_standard_types()

    def get_names_of_all_interface_classes(self) -> List[str]:
        return self.queries.names_of_all_interface_types()

    def get_names_of_all_annotation_classes(self) -> List[str]:
        return self.queries.names_of_all_tag_types()

    # ─── Hierarchy ────────────────────────────────

    def get_names_of_subclasses_of(self, class_name: str) -> List[str]:
        return self.queries.names_of_subclasses_of(class_name)

    def get_names_of_superclasses_of(self, class_name: str) -> List[str]:
        return self.queries.names_of_superclasses_of(class_name)

    def get_names_of_subinterfaces_of(self, interface_name: str) -> List[str]:
        return self.queries.names_of_subinterfaces_of(interface_name)

    def get_names_of_superinterfaces_of(self, interface_name: str) -> List[str]:
        return self.queries.names_of_superinterfaces_of(interface_name)

    def get_names_of_classes_implementing(self, interface_name: str) -> List[str]:
        return self.queries.names_of_classes_implementing(interface_name)

    # ─── Tags ─────────────────────────────────────

    def get_names_of_classes_with_annotation(self, tag_name: str) -> List[str]:
        return self.queries.names_of_types_with_tag(tag_name)

    def get_names_of_annotations_on_class(self, type_name: str) -> List[str]:
        return self.queries.names_of_tags_on_type(type_name)

    def get_names_of_meta_annotations_on_annotation(self, tag_name: str) -> List[str]:
        return self.queries.names_of_meta_tags_on_tag(tag_name)

    def get_names_of_annotations_with_meta_annotation(self, meta_tag_name: str) -> List[str]:
        return self.queries.names_of_tags_with_meta_tag(meta_tag_name)

    def get_names_of_classes_with_method_annotation(self, tag_name: str) -> List[str]:
        return self.queries.names_of_types_with_routine_tag(tag_name)

    def get_names_of_classes_with_field_annotation(self, tag_name: str) -> List[str]:
        return self.queries.names_of_types_with_attribute_tag(tag_name)

    # ─── Visualization ────────────────────────────

    def generate_dot(
        self,
        width: float = 10.24,
        height: float = 7.68,
        show_attributes: bool = True,
        show_routines: bool = True,
        visible: Optional[Iterable[str]] = None,
    ) -> str:
        """Render the graph (or the given subset of it) as Graphviz DOT text."""
        return self.exporter.render(
            visible,
            show_attributes=show_attributes,
            show_routines=show_routines,
            width=width,
            height=height,
        )

    def get_statistics(self) -> Dict[str, Any]:
        """Get graph statistics."""
        stats: Dict[str, Any] = {
            "types": len(self.index),
            "relations": self.index.store.number_of_edges(),
            "dangling_references": self.index.dangling_references,
            "conflicts": self.index.conflicts,
        }

        kinds = {}
        for kind in TypeKind:
            count = len([r for r in self.index.all_records(include_external=True) if r.kind is kind])
            if count > 0:
                kinds[kind.value] = count
        stats["kinds"] = kinds

        relation_types = {}
        for rel_type in RelationType:
            count = self.index.store.number_of_edges(rel_type)
            if count > 0:
                relation_types[rel_type.value] = count
        stats["relation_types"] = relation_types
        return stats


def build_class_graph(data: List[Dict[str, Any]], config: Optional[GraphConfig] = None) -> ClassGraph:
    """
    Build a ClassGraph from serialized type records.

    Args:
        data: List of record dictionaries (see TypeRecord.to_dict)
        config: Optional config; read from the environment when omitted

    Returns:
        Populated ClassGraph
    """
    records: Dict[str, TypeRecord] = {}
    for item in data:
        record = TypeRecord.from_dict(item)
        records[record.name] = record
    graph = ClassGraph(records, config)
    if graph.config.verbose:
        print(f"[ClassGraph] Built graph from {len(records)} records")
    return graph

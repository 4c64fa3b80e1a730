"""
Tests for RelationIndex linking and record bookkeeping.

Run with: pytest classgraph/tests/test_relation_index.py
"""

import os
from unittest import mock

import pytest

from classgraph import (
    ClassGraph,
    GraphConfig,
    RelationIndex,
    RelationType,
    TypeKind,
    TypeRecord,
    build_class_graph,
)
from classgraph.graph.records import AttributeInfo, ParameterInfo, RoutineInfo, TagUsage


CONFIG = GraphConfig(root_type_name="Object")


def _index(*records: TypeRecord, config: GraphConfig = CONFIG) -> RelationIndex:
    return RelationIndex.build({r.name: r for r in records}, config)


def test_inverse_relations_are_derived():
    """Every declared relation gets its inverse at build time."""
    index = _index(
        TypeRecord("Object"),
        TypeRecord("Animal", direct_superclass="Object"),
        TypeRecord("Dog", direct_superclass="Animal", directly_implemented_interfaces={"Walker"},
                   direct_tags={"Pet"}),
        TypeRecord("Walker", kind=TypeKind.INTERFACE, direct_superinterfaces={"Mover"}),
        TypeRecord("Mover", kind=TypeKind.INTERFACE),
        TypeRecord("Pet", kind=TypeKind.TAG, direct_tags={"Marker"}),
        TypeRecord("Marker", kind=TypeKind.TAG),
    )

    assert index.get("Animal").direct_subclasses == {"Dog"}
    assert index.get("Object").direct_subclasses == {"Animal"}
    assert index.get("Walker").implementing_classes == {"Dog"}
    assert index.get("Mover").direct_subinterfaces == {"Walker"}
    assert index.get("Pet").tagged_types == {"Dog"}
    assert index.get("Pet").direct_meta_tags == {"Marker"}
    assert index.get("Marker").types_with_this_as_meta_tag == {"Pet"}
    assert index.get("Marker").tagged_types == set()
    assert index.get("Dog").direct_meta_tags == set()


def test_preseeded_inverse_sets_are_linked_both_ways():
    """A record listed only as someone's subclass gains that superclass."""
    index = _index(
        TypeRecord("Base", direct_subclasses={"Child"}),
        TypeRecord("Child"),
        TypeRecord("Api", kind=TypeKind.INTERFACE, implementing_classes={"Child"}),
        TypeRecord("Tag", kind=TypeKind.TAG, tagged_types={"Child"}),
    )

    child = index.get("Child")
    assert child.direct_superclass == "Base"
    assert child.directly_implemented_interfaces == {"Api"}
    assert child.direct_tags == {"Tag"}
    assert index.store.has_edge("Child", "Base", RelationType.EXTENDS)


def test_subclass_declaration_wins_over_conflicting_inverse():
    index = _index(
        TypeRecord("A", direct_subclasses={"C"}),
        TypeRecord("B"),
        TypeRecord("C", direct_superclass="B"),
    )

    assert index.get("C").direct_superclass == "B"
    assert index.get("A").direct_subclasses == set()
    assert index.conflicts == 1


def test_relation_sets_are_frozen_after_build():
    index = _index(TypeRecord("A", direct_superclass="B"), TypeRecord("B"))

    with pytest.raises(AttributeError):
        index.get("B").direct_subclasses.add("X")


def test_interface_superclass_is_not_a_class_edge():
    """Interfaces may report the root as superclass; that is not inheritance."""
    index = _index(
        TypeRecord("Object"),
        TypeRecord("Api", kind=TypeKind.INTERFACE, direct_superclass="Object"),
    )

    assert index.get("Object").direct_subclasses == set()
    assert index.store.number_of_edges(RelationType.EXTENDS) == 0


def test_rebuild_from_reused_records_starts_clean():
    """Each index links its own copies, so reused records carry no earlier relations."""
    pet = TypeRecord("Pet", kind=TypeKind.TAG)
    first = _index(pet, TypeRecord("Dog", direct_tags={"Pet"}))
    assert first.get("Pet").tagged_types == {"Dog"}
    assert pet.tagged_types == set()

    graph = ClassGraph({"Pet": pet, "Dog": TypeRecord("Dog")}, CONFIG)

    assert graph.get_names_of_classes_with_annotation("Pet") == []
    assert graph.index.get("Pet").tagged_types == set()
    assert first.get("Pet").tagged_types == {"Dog"}


def test_unlinked_superclass_is_cleared():
    """Interfaces, tags and dangling superclass names end up with no superclass."""
    index = _index(
        TypeRecord("Object"),
        TypeRecord("Api", kind=TypeKind.INTERFACE, direct_superclass="Object"),
        TypeRecord("Pet", kind=TypeKind.TAG, direct_superclass="Object"),
        TypeRecord("Orphan", direct_superclass="Gone"),
        TypeRecord("Dog", direct_superclass="Object"),
    )

    assert index.get("Api").direct_superclass is None
    assert index.get("Pet").direct_superclass is None
    assert index.get("Orphan").direct_superclass is None
    assert index.get("Dog").direct_superclass == "Object"


def test_all_records_filters_external_without_mutating():
    index = _index(
        TypeRecord("app.Main", direct_superclass="lib.Base"),
        TypeRecord("lib.Base", is_external=True),
    )

    strict = index.all_records(include_external=False)
    assert {r.name for r in strict} == {"app.Main"}
    assert {r.name for r in index.all_records(include_external=True)} == {"app.Main", "lib.Base"}

    by_name = index.records_by_name(include_external=False)
    by_name.clear()
    assert len(index) == 2
    assert "lib.Base" in index


def test_names_to_origins_only_non_empty():
    index = _index(
        TypeRecord("A", origins=("app-loader",)),
        TypeRecord("B"),
    )

    assert index.names_to_origins == {"A": ("app-loader",)}


def test_signature_references_become_edges():
    index = _index(
        TypeRecord(
            "com.x.Owner",
            attributes=[AttributeInfo("pets", "java.util.List<com.x.Dog>")],
            routines=[
                RoutineInfo("adopt", "void", parameters=[ParameterInfo("com.x.Cat", "cat")]),
                RoutineInfo("<init>", "void"),
            ],
        ),
        TypeRecord("com.x.Dog"),
        TypeRecord("com.x.Cat"),
    )

    store = index.store
    assert store.has_edge("com.x.Owner", "com.x.Dog", RelationType.ATTRIBUTE_REFERENCES)
    assert store.has_edge("com.x.Owner", "com.x.Cat", RelationType.ROUTINE_REFERENCES)
    assert not store.has_edge("com.x.Owner", "com.x.Cat", RelationType.ATTRIBUTE_REFERENCES)
    # Unscanned signature types (java.util.List, void) are not dangling references
    assert index.dangling_references == 0


def test_verbose_build_prints_summary(capsys):
    _index(TypeRecord("A", direct_superclass="Gone"),
           config=GraphConfig(root_type_name="Object", verbose=True))

    out = capsys.readouterr().out
    assert "[RelationIndex] Linked 1 types" in out
    assert "[DANGLING] A -EXTENDS-> Gone" in out


def test_build_class_graph_from_dicts():
    data = [
        {"name": "java.lang.Object"},
        {"name": "com.x.Animal", "superclass": "java.lang.Object", "origins": ["main"]},
        {"name": "com.x.Dog", "superclass": "com.x.Animal",
         "tags": [{"name": "com.x.Pet", "values": {"since": "1.0"}}]},
        {"name": "com.x.Pet", "kind": "tag"},
    ]

    graph = build_class_graph(data, GraphConfig())

    assert graph.get_names_of_subclasses_of("java.lang.Object") == ["com.x.Animal", "com.x.Dog"]
    assert graph.get_names_of_classes_with_annotation("com.x.Pet") == ["com.x.Dog"]
    assert graph.index.names_to_origins == {"com.x.Animal": ("main",)}

    stats = graph.get_statistics()
    assert stats["types"] == 4
    assert stats["kinds"] == {"standard": 3, "tag": 1}
    assert stats["relation_types"] == {"EXTENDS": 2, "TAGGED_BY": 1}

    dot = graph.generate_dot(show_routines=False)
    assert '  "com.x.Dog" -> "com.x.Animal" [arrowsize=2.5]' in dot
    assert '"java.lang.Object"' not in dot


def test_record_dict_round_trip_keeps_relations():
    record = TypeRecord(
        "com.x.Dog",
        direct_superclass="com.x.Animal",
        directly_implemented_interfaces={"com.x.Walker"},
        tag_usages=[TagUsage("com.x.Pet", {"names": ["a", "b"]})],
        routines=[RoutineInfo("bark", "void", parameters=[ParameterInfo("int", "times")])],
    )

    restored = TypeRecord.from_dict(record.to_dict())

    assert restored.direct_superclass == "com.x.Animal"
    assert restored.directly_implemented_interfaces == {"com.x.Walker"}
    assert restored.direct_tags == {"com.x.Pet"}
    assert str(restored.tag_usages[0]) == '@com.x.Pet(names={"a", "b"})'
    assert restored.routines[0].parameters[0].name == "times"


def test_unknown_kind_raises():
    with pytest.raises(ValueError):
        TypeRecord.from_dict({"name": "A", "kind": "struct"})


def test_config_from_env():
    env = {
        "CLASSGRAPH_ENABLE_EXTERNAL": "true",
        "CLASSGRAPH_IGNORE_ROUTINE_VISIBILITY": "1",
        "CLASSGRAPH_IGNORE_ATTRIBUTE_VISIBILITY": "maybe",
        "CLASSGRAPH_ROOT_TYPE": "Object",
    }
    with mock.patch.dict(os.environ, env):
        config = GraphConfig.from_env()

    assert config.enable_external_classes is True
    assert config.ignore_routine_visibility is True
    assert config.ignore_attribute_visibility is False
    assert config.root_type_name == "Object"

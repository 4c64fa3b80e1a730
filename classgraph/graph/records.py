"""
Type records consumed by the class graph.

A TypeRecord describes one discovered type: its identity, its kind, the
direct relations the scanner found for it, and its member signatures.
Inverse relation sets (subclasses, implementing classes, tagged types...)
are filled in by RelationIndex when the graph is built.
"""

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple


CONSTRUCTOR_NAME = "<init>"
STATIC_INITIALIZER_NAME = "<clinit>"

# Dotted identifiers inside a type signature, e.g. "java.util.Map<K, com.x.V>[]"
_TYPE_NAME_PATTERN = re.compile(r"[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*")


class TypeKind(Enum):
    """Kind of a discovered type. Exactly one per record."""
    STANDARD = "standard"     # Regular class (including enums)
    INTERFACE = "interface"   # Interface
    TAG = "tag"               # Annotation-like marker type


def format_tag_value(value: Any) -> str:
    """Render a tag parameter value the way it would appear in source."""
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (set, frozenset)):
        return "{" + ", ".join(sorted(format_tag_value(v) for v in value)) + "}"
    if isinstance(value, (list, tuple)):
        return "{" + ", ".join(format_tag_value(v) for v in value) + "}"
    return str(value)


def referenced_names(type_signature: Optional[str]) -> Set[str]:
    """Extract every dotted type name mentioned in a type signature string."""
    if not type_signature:
        return set()
    return set(_TYPE_NAME_PATTERN.findall(type_signature))


def _tag_list(data: Optional[Iterable[Dict[str, Any]]]) -> List["TagUsage"]:
    return [TagUsage.from_dict(t) for t in (data or [])]


@dataclass
class TagUsage:
    """A tag applied to a type, member or parameter, with its parameter values."""
    name: str
    values: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        if not self.values:
            return f"@{self.name}"
        params = ", ".join(f"{k}={format_tag_value(v)}" for k, v in self.values.items())
        return f"@{self.name}({params})"

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "values": dict(self.values)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TagUsage":
        return cls(name=data["name"], values=dict(data.get("values") or {}))


@dataclass
class ParameterInfo:
    """A routine parameter."""
    type_name: str
    name: Optional[str] = None
    tags: List[TagUsage] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type_name": self.type_name,
            "name": self.name,
            "tags": [t.to_dict() for t in self.tags],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParameterInfo":
        return cls(
            type_name=data["type_name"],
            name=data.get("name"),
            tags=_tag_list(data.get("tags")),
        )


@dataclass
class AttributeInfo:
    """A field/attribute declared by a type."""
    name: str
    type_name: str
    tags: List[TagUsage] = field(default_factory=list)
    modifiers: List[str] = field(default_factory=list)

    @property
    def modifiers_str(self) -> str:
        return " ".join(self.modifiers)

    @property
    def tag_names(self) -> Set[str]:
        return {t.name for t in self.tags}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type_name": self.type_name,
            "tags": [t.to_dict() for t in self.tags],
            "modifiers": list(self.modifiers),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AttributeInfo":
        return cls(
            name=data["name"],
            type_name=data["type_name"],
            tags=_tag_list(data.get("tags")),
            modifiers=list(data.get("modifiers") or []),
        )


@dataclass
class RoutineInfo:
    """
    A method/routine declared by a type.

    Constructors use the name "<init>" and static initializer blocks use
    "<clinit>", as reported by the scanner.
    """
    name: str
    result_type: str = "void"
    parameters: List[ParameterInfo] = field(default_factory=list)
    tags: List[TagUsage] = field(default_factory=list)
    modifiers: List[str] = field(default_factory=list)

    @property
    def is_constructor(self) -> bool:
        return self.name == CONSTRUCTOR_NAME

    @property
    def is_static_initializer(self) -> bool:
        return self.name == STATIC_INITIALIZER_NAME

    @property
    def modifiers_str(self) -> str:
        return " ".join(self.modifiers)

    @property
    def tag_names(self) -> Set[str]:
        return {t.name for t in self.tags}

    def referenced_type_names(self) -> Set[str]:
        names = referenced_names(None if self.is_constructor else self.result_type)
        for param in self.parameters:
            names |= referenced_names(param.type_name)
        return names

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "result_type": self.result_type,
            "parameters": [p.to_dict() for p in self.parameters],
            "tags": [t.to_dict() for t in self.tags],
            "modifiers": list(self.modifiers),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoutineInfo":
        return cls(
            name=data["name"],
            result_type=data.get("result_type", "void"),
            parameters=[ParameterInfo.from_dict(p) for p in data.get("parameters") or []],
            tags=_tag_list(data.get("tags")),
            modifiers=list(data.get("modifiers") or []),
        )


@dataclass(eq=False)
class TypeRecord:
    """
    One discovered type.

    The scanner supplies at least the direct (outgoing) relations:
    superclass, implemented interfaces, superinterfaces and tags. Any
    inverse set it already knows may be pre-seeded; RelationIndex merges
    both directions and rewrites every set so the pairs agree.

    For TAG records, tags carried by the record are meta-tags: they are
    kept in both direct_tags and direct_meta_tags.
    """
    name: str
    kind: TypeKind = TypeKind.STANDARD
    is_external: bool = False
    is_enum: bool = False
    modifiers: List[str] = field(default_factory=list)
    origins: Tuple[str, ...] = ()

    # Direct relations (by type name)
    direct_superclass: Optional[str] = None
    directly_implemented_interfaces: Set[str] = field(default_factory=set)
    direct_superinterfaces: Set[str] = field(default_factory=set)
    direct_tags: Set[str] = field(default_factory=set)
    direct_meta_tags: Set[str] = field(default_factory=set)
    tag_usages: List[TagUsage] = field(default_factory=list)

    # Members
    attributes: List[AttributeInfo] = field(default_factory=list)
    routines: List[RoutineInfo] = field(default_factory=list)

    # Inverse relations, derived at build time
    direct_subclasses: Set[str] = field(default_factory=set)
    implementing_classes: Set[str] = field(default_factory=set)
    direct_subinterfaces: Set[str] = field(default_factory=set)
    tagged_types: Set[str] = field(default_factory=set)
    types_with_this_as_meta_tag: Set[str] = field(default_factory=set)

    @property
    def package_name(self) -> str:
        dot = self.name.rfind(".")
        return self.name[:dot] if dot > 0 else ""

    @property
    def simple_name(self) -> str:
        return self.name[self.name.rfind(".") + 1:]

    @property
    def modifiers_str(self) -> str:
        return " ".join(self.modifiers)

    @property
    def is_standard(self) -> bool:
        return self.kind is TypeKind.STANDARD

    @property
    def is_interface(self) -> bool:
        return self.kind is TypeKind.INTERFACE

    @property
    def is_tag(self) -> bool:
        return self.kind is TypeKind.TAG

    def declared_tag_names(self) -> Set[str]:
        """Names of all tags the scanner attached to this type itself."""
        names = set(self.direct_tags) | {t.name for t in self.tag_usages}
        if self.is_tag:
            names |= self.direct_meta_tags
        return names

    @property
    def attribute_tag_names(self) -> FrozenSet[str]:
        return frozenset(n for a in self.attributes for n in a.tag_names)

    @property
    def routine_tag_names(self) -> FrozenSet[str]:
        return frozenset(n for r in self.routines for n in r.tag_names)

    def referenced_type_names_in_attributes(self) -> Set[str]:
        names: Set[str] = set()
        for attribute in self.attributes:
            names |= referenced_names(attribute.type_name)
        names.discard(self.name)
        return names

    def referenced_type_names_in_routines(self) -> Set[str]:
        names: Set[str] = set()
        for routine in self.routines:
            names |= routine.referenced_type_names()
        names.discard(self.name)
        return names

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the record (direct relations and members only)."""
        return {
            "name": self.name,
            "kind": self.kind.value,
            "is_external": self.is_external,
            "is_enum": self.is_enum,
            "modifiers": list(self.modifiers),
            "origins": list(self.origins),
            "superclass": self.direct_superclass,
            "interfaces": sorted(self.directly_implemented_interfaces),
            "superinterfaces": sorted(self.direct_superinterfaces),
            "tags": [t.to_dict() for t in self.tag_usages],
            "tag_names": sorted(self.declared_tag_names()),
            "attributes": [a.to_dict() for a in self.attributes],
            "routines": [r.to_dict() for r in self.routines],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TypeRecord":
        """Deserialize a record. Raises ValueError for an unknown kind."""
        tag_usages = _tag_list(data.get("tags"))
        tag_names = set(data.get("tag_names") or []) | {t.name for t in tag_usages}
        kind = TypeKind(data.get("kind", TypeKind.STANDARD.value))
        return cls(
            name=data["name"],
            kind=kind,
            is_external=bool(data.get("is_external", False)),
            is_enum=bool(data.get("is_enum", False)),
            modifiers=list(data.get("modifiers") or []),
            origins=tuple(data.get("origins") or ()),
            direct_superclass=data.get("superclass"),
            directly_implemented_interfaces=set(data.get("interfaces") or []),
            direct_superinterfaces=set(data.get("superinterfaces") or []),
            direct_tags=set(tag_names),
            direct_meta_tags=set(tag_names) if kind is TypeKind.TAG else set(),
            tag_usages=tag_usages,
            attributes=[AttributeInfo.from_dict(a) for a in data.get("attributes") or []],
            routines=[RoutineInfo.from_dict(r) for r in data.get("routines") or []],
        )

"""
Graphviz export of the class graph.

Renders a set of visible types as a DOT digraph with HTML-like node
labels (header, package, name, tags, attributes, routines) and one
styled edge per relation whose two endpoints are both visible.

Edge styles by relation:
    EXTENDS              class -> superclass          plain arrow
    IMPLEMENTS           class -> interface           filled diamond head
    EXTENDS_INTERFACE    interface -> superinterface  open diamond head
    TAGGED_BY            type -> tag                  filled dot head
    META_TAGGED_BY       tag -> meta-tag              inverted dot head
    *_TAGGED_BY (member) type -> member tag           open dot head
    ATTRIBUTE_REFERENCES referenced <- type           open box tail
    ROUTINE_REFERENCES   referenced <- type           filled box tail
"""

import html
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Set, Tuple

from classgraph.graph.records import AttributeInfo, RoutineInfo, TypeKind, TypeRecord
from classgraph.graph.relation_index import RelationIndex
from classgraph.graph.relationships import RelationType


# --- CONFIGURATION ---
PARAM_WRAP_WIDTH = 40
HEADER_DARKNESS = 0.8
ARROW_SIZE = 2.5
FONT_NAME = "Courier, Regular"

_PARAM_ROW_BREAK = "</td></tr><tr><td></td><td></td><td align='left' valign='top'>"


@dataclass(frozen=True)
class NodeStyle:
    """Shape and fill color (six hex digits, no '#') for one type kind."""
    shape: str
    fill_color: str


@dataclass(frozen=True)
class EdgeStyle:
    """
    Arrow decoration for one relation kind.

    reverse=True draws the edge from target to source with dir=back, so
    the decoration sits on the referencing type's end.
    """
    arrowhead: Optional[str] = None
    arrowtail: Optional[str] = None
    reverse: bool = False

    def attributes(self) -> str:
        parts = []
        if self.arrowhead:
            parts.append(f"arrowhead={self.arrowhead}")
        if self.arrowtail:
            parts.append(f"arrowtail={self.arrowtail}")
        parts.append(f"arrowsize={ARROW_SIZE}")
        if self.reverse:
            parts.append("dir=back")
        return "[" + ", ".join(parts) + "]"


NODE_STYLES: Mapping[TypeKind, NodeStyle] = MappingProxyType({
    TypeKind.STANDARD: NodeStyle("box", "fff2b6"),
    TypeKind.INTERFACE: NodeStyle("diamond", "b6e7ff"),
    TypeKind.TAG: NodeStyle("oval", "f3c9ff"),
})

EDGE_STYLES: Mapping[RelationType, EdgeStyle] = MappingProxyType({
    RelationType.EXTENDS: EdgeStyle(),
    RelationType.IMPLEMENTS: EdgeStyle(arrowhead="diamond"),
    RelationType.EXTENDS_INTERFACE: EdgeStyle(arrowhead="odiamond"),
    RelationType.TAGGED_BY: EdgeStyle(arrowhead="dot"),
    RelationType.META_TAGGED_BY: EdgeStyle(arrowhead="invdot"),
    RelationType.ROUTINE_TAGGED_BY: EdgeStyle(arrowhead="odot"),
    RelationType.ATTRIBUTE_TAGGED_BY: EdgeStyle(arrowhead="odot"),
    RelationType.ATTRIBUTE_REFERENCES: EdgeStyle(arrowtail="obox", reverse=True),
    RelationType.ROUTINE_REFERENCES: EdgeStyle(arrowtail="box", reverse=True),
})

_KIND_ORDER = (TypeKind.STANDARD, TypeKind.INTERFACE, TypeKind.TAG)


def darken_color(fill_color: str, factor: float = HEADER_DARKNESS) -> str:
    """
    Scale each channel of an RRGGBB color by factor.

    >>> darken_color("fff2b6")
    '#ccc191'
    """
    hex_digits = fill_color.lstrip("#")
    channels = [int(int(hex_digits[i:i + 2], 16) * factor) for i in (0, 2, 4)]
    return "#" + "".join(f"{c:02x}" for c in channels)


def _escape(text: str) -> str:
    return html.escape(text)


def _quote(name: str) -> str:
    return '"' + name.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _kind_word(record: TypeRecord) -> str:
    if record.is_enum:
        return "enum"
    if record.is_tag:
        return "@interface"
    if record.is_interface:
        return "interface"
    return "class"


class DiagramExporter:
    """
    Renders RelationIndex contents as Graphviz DOT text.

    The exporter performs no I/O; render() returns the document.
    """

    def __init__(self, index: RelationIndex):
        self.index = index
        self.config = index.config

    def visible_nodes(self) -> Set[str]:
        """Default node set: every listable type (root and filtered externals excluded)."""
        return {name for name in self.index.records_by_name() if self.index.is_listable(name)}

    # ─── Document ─────────────────────────────────

    def render(
        self,
        visible: Optional[Iterable[str]] = None,
        show_attributes: bool = True,
        show_routines: bool = True,
        width: float = 10.24,
        height: float = 7.68,
        edge_styles: Optional[Mapping[RelationType, EdgeStyle]] = None,
    ) -> str:
        """
        Generate a DOT document for the given node names.

        Args:
            visible: Names of types to draw. Defaults to visible_nodes().
                Unknown names, the root type and hidden external types
                are ignored.
            show_attributes: Include attribute rows in node labels
            show_routines: Include routine rows in node labels
            width, height: Output canvas size in inches
            edge_styles: Override of EDGE_STYLES; relations missing from
                the mapping are not drawn.

        Returns:
            The complete DOT document
        """
        styles = EDGE_STYLES if edge_styles is None else edge_styles
        if visible is None:
            visible_names = self.visible_nodes()
        else:
            visible_names = {n for n in visible if self.index.is_listable(n)}

        buf: List[str] = [
            "digraph {\n",
            f'size="{float(width)},{float(height)}";\n',
            "layout=dot;\n",
            'rankdir="BT";\n',
            "overlap=false;\n",
            "splines=true;\n",
            "pack=true;\n",
            f'graph [fontname = "{FONT_NAME}"]\n',
            f'node [fontname = "{FONT_NAME}"]\n',
            f'edge [fontname = "{FONT_NAME}"]\n',
        ]

        records = [self.index.get(name) for name in sorted(visible_names)]
        for kind in _KIND_ORDER:
            for record in records:
                if record.kind is kind:
                    buf.append(_quote(record.name))
                    buf.append(self.label_node(record, show_attributes, show_routines))
                    buf.append(";\n")

        buf.append("\n")
        edges = self._visible_edges(visible_names, styles)
        for source, target, style in edges:
            if style.reverse:
                source, target = target, source
            buf.append(f"  {_quote(source)} -> {_quote(target)} {style.attributes()}\n")
        buf.append("}")

        if self.config.verbose:
            print(f"[DiagramExporter] Rendered {len(records)} nodes, {len(edges)} edges")
        return "".join(buf)

    def _visible_edges(
        self, visible: Set[str], styles: Mapping[RelationType, EdgeStyle]
    ) -> List[Tuple[str, str, EdgeStyle]]:
        """Edges whose source and target are both visible, in a stable order."""
        order = {relation: i for i, relation in enumerate(styles)}
        found = []
        for rel in self.index.store.edges(styles.keys()):
            if rel.source in visible and rel.target in visible:
                found.append((order[rel.rel_type], rel.source, rel.target, styles[rel.rel_type]))
        found.sort(key=lambda e: (e[0], e[1], e[2]))

        edges: List[Tuple[str, str, EdgeStyle]] = []
        seen = set()
        for _, source, target, style in found:
            # Routine and attribute tags to the same tag share one edge
            if (source, target, style) not in seen:
                seen.add((source, target, style))
                edges.append((source, target, style))
        return edges

    # ─── Node labels ──────────────────────────────

    def label_node(self, record: TypeRecord, show_attributes: bool = True, show_routines: bool = True) -> str:
        """Build the attribute list (shape, colors, HTML label) for one node."""
        style = NODE_STYLES[record.kind]
        header_color = darken_color(style.fill_color)
        buf = [
            f'[shape={style.shape},style=filled,fillcolor="#{style.fill_color}",label=<',
            "<table border='0' cellborder='0' cellspacing='1'>",
        ]

        header = " ".join(part for part in (record.modifiers_str, _kind_word(record)) if part)
        buf.append(f"<tr><td>{_escape(header)}</td></tr>")

        if record.package_name:
            buf.append(f"<tr><td><b>{_escape(record.package_name + '.')}</b></td></tr>")
        buf.append(f"<tr><td><font point-size='24'><b>{_escape(record.simple_name)}</b></font></td></tr>")

        usages = {tag.name: tag for tag in record.tag_usages}
        tag_names = sorted(set(record.direct_tags) | set(usages))
        if tag_names:
            buf.append(self._section_header("TAGS", header_color))
            for tag_name in tag_names:
                text = str(usages[tag_name]) if tag_name in usages else f"@{tag_name}"
                buf.append(f"<tr><td align='center' valign='top'>{_escape(text)}</td></tr>")

        if show_attributes and record.attributes:
            prefix = "" if self.config.ignore_attribute_visibility else "PUBLIC "
            buf.append(self._section_header(prefix + "ATTRIBUTES", header_color))
            buf.append("<tr><td cellpadding='0'><table border='0' cellborder='0'>")
            for attribute in sorted(record.attributes, key=lambda a: a.name):
                buf.append(self._attribute_row(attribute))
            buf.append("</table></td></tr>")

        routines = [r for r in record.routines if not r.is_static_initializer]
        if show_routines and routines:
            prefix = "" if self.config.ignore_routine_visibility else "PUBLIC "
            buf.append("<tr><td cellpadding='0'><table border='0' cellborder='0'>")
            buf.append(self._section_header(prefix + "ROUTINES", header_color))
            for routine in sorted(routines, key=lambda r: r.name):
                buf.append(self._routine_row(record, routine))
            buf.append("</table></td></tr>")

        buf.append("</table>")
        buf.append(">]")
        return "".join(buf)

    @staticmethod
    def _section_header(title: str, color: str) -> str:
        return (
            f"<tr><td colspan='3' bgcolor='{color}'>"
            f"<font point-size='12'><b>{title}</b></font></td></tr>"
        )

    def _attribute_row(self, attribute: AttributeInfo) -> str:
        parts = [_escape(str(tag)) for tag in attribute.tags]
        if self.config.ignore_attribute_visibility and attribute.modifiers_str:
            parts.append(_escape(attribute.modifiers_str))
        parts.append(_escape(attribute.type_name))
        return (
            f"<tr><td align='right' valign='top'>{' '.join(parts)}</td>"
            f"<td align='left' valign='top'><b>{_escape(attribute.name)}</b></td></tr>"
        )

    def _routine_row(self, record: TypeRecord, routine: RoutineInfo) -> str:
        parts = [_escape(str(tag)) for tag in routine.tags]
        if self.config.ignore_routine_visibility and routine.modifiers_str:
            parts.append(_escape(routine.modifiers_str))
        if routine.is_constructor:
            parts.append("<b>&lt;constructor&gt;</b>")
            name = record.simple_name
        else:
            parts.append(_escape(routine.result_type))
            name = routine.name
        return (
            f"<tr><td align='right' valign='top'>{' '.join(parts)}</td>"
            f"<td align='left' valign='top'><b>{_escape(name)}</b>&nbsp;</td>"
            f"<td align='left' valign='top'>{self._parameter_list(routine)}</td></tr>"
        )

    @staticmethod
    def _parameter_list(routine: RoutineInfo) -> str:
        """Parenthesized parameters, starting a new label row past PARAM_WRAP_WIDTH columns."""
        buf = ["("]
        wrap_pos = 0
        for i, param in enumerate(routine.parameters):
            if i > 0:
                buf.append(", ")
                wrap_pos += 2
            if wrap_pos > PARAM_WRAP_WIDTH:
                buf.append(_PARAM_ROW_BREAK)
                wrap_pos = 0

            for tag in param.tags:
                text = str(tag)
                buf.append(_escape(text) + " ")
                wrap_pos += 1 + len(text)
                if wrap_pos > PARAM_WRAP_WIDTH:
                    buf.append(_PARAM_ROW_BREAK)
                    wrap_pos = 0

            buf.append(_escape(param.type_name))
            wrap_pos += len(param.type_name)

            if param.name:
                buf.append(f" <b>{_escape(param.name)}</b>")
                wrap_pos += 1 + len(param.name)
        buf.append(")")
        return "".join(buf)

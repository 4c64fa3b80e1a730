"""
Export module - Graphviz rendering of the class graph.
"""

from .dot_exporter import (
    DiagramExporter,
    EdgeStyle,
    NodeStyle,
    EDGE_STYLES,
    NODE_STYLES,
    PARAM_WRAP_WIDTH,
    darken_color,
)

__all__ = [
    "DiagramExporter",
    "EdgeStyle",
    "NodeStyle",
    "EDGE_STYLES",
    "NODE_STYLES",
    "PARAM_WRAP_WIDTH",
    "darken_color",
]

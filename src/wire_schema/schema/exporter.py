"""
Serializer from a Layout to wire-schema text.

Output is deterministic: components then wires, each in stored order, one
line each, every line newline-terminated.

    #wire-schema 1
    C ram 0 p:-12,-23
    W 3 ns:[13,6 p:id/rhsImm|22,6,0]
"""

from __future__ import annotations

from typing import List

from wire_schema.core.model import CompPortRef, Component, Layout, WireGraph, WireNode
from wire_schema.core.numbers import format_number

from .grammar import (
    COMPONENT_MARKER,
    FIELD_SEPARATOR,
    HEADER_PREFIX,
    NODE_SEPARATOR,
    NODES_LABEL,
    PORT_LABEL,
    PORT_SEPARATOR,
    POSITION_LABEL,
    SCHEMA_VERSION,
    WIRE_MARKER,
)

HEADER_LINE = f"{HEADER_PREFIX} {SCHEMA_VERSION}"


def format_component(comp: Component) -> str:
    """Format one component line (without the trailing newline)."""
    x = format_number(comp.pos.x)
    y = format_number(comp.pos.y)
    return f"{COMPONENT_MARKER} {comp.id} {comp.def_id} {POSITION_LABEL}:{x}{FIELD_SEPARATOR}{y}"


def format_node(node: WireNode, index: int) -> str:
    """
    Format one node descriptor.

    Only edges pointing at earlier nodes are written, so a node list built
    without the back-edge check still exports to text that imports cleanly.
    """
    fields = [format_number(node.pos.x), format_number(node.pos.y)]
    fields.extend(str(edge) for edge in node.edges if 0 <= edge < index)
    text = FIELD_SEPARATOR.join(fields)
    if isinstance(node.ref, CompPortRef):
        text += f" {PORT_LABEL}:{node.ref.component_id}{PORT_SEPARATOR}{node.ref.port_id}"
    return text


def format_wire(wire: WireGraph) -> str:
    """Format one wire line (without the trailing newline)."""
    nodes = NODE_SEPARATOR.join(format_node(node, j) for j, node in enumerate(wire.nodes))
    return f"{WIRE_MARKER} {wire.id} {NODES_LABEL}:[{nodes}]"


def export_layout(layout: Layout) -> str:
    """
    Serialize a layout to wire-schema text.

    Args:
        layout: Layout to serialize. It is not modified.

    Returns:
        The full file contents, ending with a newline
    """
    lines: List[str] = [HEADER_LINE]
    lines.extend(format_component(comp) for comp in layout.components)
    lines.extend(format_wire(wire) for wire in layout.wires)
    return "\n".join(lines) + "\n"

"""
Decoders for component and wire lines.

Each decoder receives the tokenized parts of one line and returns the record
it describes. A line that cannot produce a record raises ``LineError``.
Problems confined to one field are passed to ``report`` as ``FieldError``
instances and decoding continues without that field. Columns in both are
relative to the line given to the tokenizer.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from wire_schema.core.model import (
    NO_REF,
    CompPortRef,
    Component,
    Layout,
    PortRef,
    Vec2,
    WireGraph,
    WireNode,
    is_valid_id,
)
from wire_schema.core.numbers import parse_decimal, parse_index
from wire_schema.exceptions import FieldError, LineError

from .grammar import (
    FIELD_SEPARATOR,
    NODE_SEPARATOR,
    NODES_LABEL,
    PORT_LABEL,
    PORT_SEPARATOR,
    POSITION_LABEL,
)
from .tokenizer import Part, TokenKind, tokenize_line

ReportFn = Callable[[FieldError], None]


def _require_id(part: Part, what: str, prefix: str, line_number: int) -> str:
    if not part.is_plain_atom or not is_valid_id(part.value):
        raise LineError(
            f"{prefix}: {what} '{part.raw_text}' is not a valid id",
            line=line_number,
            column=part.column,
            suggestions=["Ids must not contain whitespace or any of , | : [ ] /"],
        )
    return part.value


# ============================================================================
# Component lines
# ============================================================================


def decode_component_line(
    parts: List[Part], line_number: int, layout: Layout, report: ReportFn
) -> Component:
    """
    Decode ``C <id> <defId> p:<x>,<y>``.

    Args:
        parts: Tokenized line, first part is the component marker
        line_number: 1-based line number, for error context
        layout: Layout decoded so far, used to reject duplicate ids
        report: Receives recoverable field errors

    Returns:
        The decoded Component. A missing or invalid position leaves the
        component at the origin.

    Raises:
        LineError: Too few parts, invalid id or type, or duplicate id
    """
    prefix = "Invalid component line"
    if len(parts) < 3:
        raise LineError(
            f"{prefix}: must have at least 3 parts",
            line=line_number,
            column=parts[0].column if parts else None,
        )

    comp_id = _require_id(parts[1], "id", prefix, line_number)
    def_id = _require_id(parts[2], "type", prefix, line_number)
    if layout.get_component(comp_id) is not None:
        raise LineError(
            f"{prefix}: duplicate component id '{comp_id}'",
            line=line_number,
            column=parts[1].column,
        )

    pos: Optional[Vec2] = None
    saw_position = False
    for part in parts[3:]:
        if part.label == POSITION_LABEL:
            if saw_position:
                report(FieldError(f"{prefix}: duplicate p: part", line=line_number, column=part.column))
                continue
            saw_position = True
            try:
                pos = _decode_position(part, prefix, line_number)
            except FieldError as e:
                report(e)
        else:
            report(
                FieldError(
                    f"{prefix}: unknown part '{part.raw_text}'",
                    line=line_number,
                    column=part.column,
                )
            )

    if not saw_position:
        report(
            FieldError(
                f"{prefix}: missing p: position",
                line=line_number,
                suggestions=["Add a position such as p:0,0"],
            )
        )

    return Component(id=comp_id, def_id=def_id, pos=pos if pos is not None else Vec2())


def _decode_position(part: Part, prefix: str, line_number: int) -> Vec2:
    if part.kind is not TokenKind.ATOM:
        raise FieldError(f"{prefix}: p: must be x,y", line=line_number, column=part.column)
    fields = part.value.split(FIELD_SEPARATOR)
    if len(fields) != 2:
        raise FieldError(f"{prefix}: p: must have 2 parts", line=line_number, column=part.value_column)
    x = parse_decimal(fields[0])
    y = parse_decimal(fields[1])
    if x is None or y is None:
        raise FieldError(f"{prefix}: p: must have 2 numbers", line=line_number, column=part.value_column)
    return Vec2(x, y)


# ============================================================================
# Wire lines
# ============================================================================


def decode_wire_line(
    parts: List[Part], line_number: int, layout: Layout, report: ReportFn
) -> WireGraph:
    """
    Decode ``W <id> ns:[<node>|<node>|...]``.

    Args:
        parts: Tokenized line, first part is the wire marker
        line_number: 1-based line number, for error context
        layout: Layout decoded so far, used to reject duplicate ids
        report: Receives recoverable field errors

    Returns:
        The decoded WireGraph

    Raises:
        LineError: Too few parts, invalid or duplicate id, or no ns:[...] list
    """
    prefix = "Invalid wire line"
    if len(parts) < 3:
        raise LineError(
            f"{prefix}: must have at least 3 space-separated parts",
            line=line_number,
            column=parts[0].column if parts else None,
        )

    wire_id = _require_id(parts[1], "id", prefix, line_number)
    if layout.get_wire(wire_id) is not None:
        raise LineError(
            f"{prefix}: duplicate wire id '{wire_id}'",
            line=line_number,
            column=parts[1].column,
        )

    nodes: Optional[List[WireNode]] = None
    for part in parts[2:]:
        if part.label != NODES_LABEL:
            report(
                FieldError(
                    f"{prefix}: unknown part '{part.raw_text}'",
                    line=line_number,
                    column=part.column,
                )
            )
            continue
        if nodes is not None:
            report(FieldError(f"{prefix}: duplicate ns: part", line=line_number, column=part.column))
            continue
        if part.kind is not TokenKind.BRACKET:
            raise LineError(
                f"{prefix}: ns: must be a bracketed node list",
                line=line_number,
                column=part.column,
                suggestions=["Wrap the nodes in brackets: ns:[x,y|x,y,0]"],
            )
        if not part.terminated:
            report(
                FieldError(
                    f"{prefix}: ns: node list is missing its closing ']'",
                    line=line_number,
                    column=part.column,
                )
            )
        nodes = decode_node_list(part.value, line_number, report, column=part.value_column)

    if nodes is None:
        raise LineError(f"{prefix}: missing ns:[...] node list", line=line_number)

    return WireGraph(id=wire_id, nodes=nodes)


def decode_node_list(
    value: str, line_number: int, report: ReportFn, column: int = 1
) -> List[WireNode]:
    """
    Decode the interior of an ``ns:[...]`` bracket.

    Nodes that fail to decode are dropped, so later nodes take lower
    indices than written. Their edges are checked against the index they
    actually receive.

    Args:
        value: Pipe-separated node descriptors
        line_number: 1-based line number, for error context
        report: Receives recoverable field errors
        column: 1-based column of ``value`` within the line

    Returns:
        Decoded nodes in order. An empty value yields no nodes.
    """
    nodes: List[WireNode] = []
    if not value.strip():
        return nodes

    offset = 0
    for descriptor in value.split(NODE_SEPARATOR):
        node = _decode_node(descriptor, len(nodes), line_number, column + offset, report)
        if node is not None:
            nodes.append(node)
        offset += len(descriptor) + len(NODE_SEPARATOR)
    return nodes


def _decode_node(
    descriptor: str, index: int, line_number: int, column: int, report: ReportFn
) -> Optional[WireNode]:
    prefix = "Invalid wire node"

    def fail(message: str, part: Optional[Part] = None) -> FieldError:
        col = column + part.column - 1 if part is not None else column
        return FieldError(f"{prefix}: {message}", line=line_number, column=col)

    parts = tokenize_line(descriptor)
    if not parts:
        report(fail("empty node"))
        return None

    head = parts[0]
    if not head.is_plain_atom:
        report(fail("must start with x,y", head))
        return None

    fields = head.value.split(FIELD_SEPARATOR)
    if len(fields) < 2:
        report(fail("must have at least 2 parts", head))
        return None
    x = parse_decimal(fields[0])
    y = parse_decimal(fields[1])
    if x is None or y is None:
        report(fail("must have 2 numbers", head))
        return None

    edges: List[int] = []
    for text in fields[2:]:
        edge = parse_index(text)
        if edge is None:
            report(fail(f"edge '{text}' must be a number", head))
        elif edge >= index:
            report(fail(f"edge {edge} must reference an earlier node than {index}", head))
        elif edge in edges:
            report(fail(f"duplicate edge {edge}", head))
        else:
            edges.append(edge)

    ref: PortRef = NO_REF
    saw_ref = False
    for part in parts[1:]:
        if part.label != PORT_LABEL:
            report(fail(f"unknown part '{part.raw_text}'", part))
            continue
        if saw_ref:
            report(fail("duplicate p: part", part))
            continue
        saw_ref = True
        ref_fields = part.value.split(PORT_SEPARATOR)
        if (
            part.kind is not TokenKind.ATOM
            or len(ref_fields) != 2
            or not all(is_valid_id(f) for f in ref_fields)
        ):
            report(fail("p: must have 2 parts", part))
            continue
        ref = CompPortRef(component_id=ref_fields[0], port_id=ref_fields[1])

    return WireNode(pos=Vec2(x, y), edges=tuple(edges), ref=ref)

"""Layout model and shared value types."""

from .model import (
    NO_REF,
    CompPortRef,
    Component,
    Layout,
    NoRef,
    PortRef,
    Vec2,
    WireGraph,
    WireNode,
    check_back_edges,
    is_valid_id,
)
from .numbers import format_number, parse_decimal, parse_index
from .types import IssueKind, RoundTripMode, Severity

__all__ = [
    "Vec2",
    "NoRef",
    "NO_REF",
    "CompPortRef",
    "PortRef",
    "Component",
    "WireNode",
    "WireGraph",
    "Layout",
    "check_back_edges",
    "is_valid_id",
    "format_number",
    "parse_decimal",
    "parse_index",
    "Severity",
    "IssueKind",
    "RoundTripMode",
]

"""
In-memory circuit layout model.

A Layout holds placed components and routed wires. Each wire is a
WireGraph: an ordered list of WireNodes where a node's index is its
identity. Nodes connect only to earlier nodes in the same wire
(back-edges), so the topology is acyclic and append-only:

    nodes[0]  (13, 6)  -> id/rhsImm
    nodes[1]  (22, 6)  edges (0,)
    nodes[2]  (22, 12) edges (1,)

Sizes and port lists are placeholders at this layer. Placement code fills
them in after import.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Tuple, Union

# Characters that delimit fields in the text format
ID_FORBIDDEN_CHARS = frozenset(",|:[]/")


def is_valid_id(value: str) -> bool:
    """Check that an id is non-empty and free of whitespace and grammar delimiters."""
    if not value:
        return False
    return not any(c.isspace() or c in ID_FORBIDDEN_CHARS for c in value)


@dataclass(frozen=True)
class Vec2:
    """Immutable 2D position with finite float coordinates."""

    x: float = 0.0
    y: float = 0.0

    def __post_init__(self):
        x = float(self.x)
        y = float(self.y)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"Coordinates must be finite, got ({self.x}, {self.y})")
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


@dataclass(frozen=True)
class NoRef:
    """Port reference variant for a node not attached to any component."""

    def __bool__(self) -> bool:
        return False


NO_REF = NoRef()


@dataclass(frozen=True)
class CompPortRef:
    """Port reference variant naming a port on a placed component."""

    component_id: str
    port_id: str

    def __str__(self) -> str:
        return f"{self.component_id}/{self.port_id}"


PortRef = Union[NoRef, CompPortRef]


@dataclass
class Component:
    """
    A placed component.

    Attributes:
        id: Unique id within the layout
        def_id: Component type id, resolved by an external catalog
        pos: Position of the component
        size: Always zero until placement code runs
        ports: Always empty until placement code runs
    """

    id: str
    def_id: str
    pos: Vec2 = field(default_factory=Vec2)
    size: Vec2 = field(default_factory=Vec2)
    ports: List[Any] = field(default_factory=list)


@dataclass
class WireNode:
    """
    One point of a wire.

    Attributes:
        pos: Position of the node
        edges: Indices of earlier nodes in the same wire this node connects to
        ref: NO_REF or a CompPortRef
    """

    pos: Vec2
    edges: Tuple[int, ...] = ()
    ref: PortRef = NO_REF

    def __post_init__(self):
        self.edges = tuple(self.edges)


def check_back_edges(index: int, node: WireNode) -> None:
    """
    Verify that a node placed at ``index`` only points at earlier nodes.

    Raises:
        ValueError: If an edge is negative, not less than ``index``, or repeated
    """
    seen = set()
    for edge in node.edges:
        if not 0 <= edge < index:
            raise ValueError(
                f"Node {index} has edge {edge}; edges must reference an earlier node (0..{index - 1})"
            )
        if edge in seen:
            raise ValueError(f"Node {index} repeats edge {edge}")
        seen.add(edge)


@dataclass
class WireGraph:
    """A wire route: ordered nodes joined by back-edges."""

    id: str
    nodes: List[WireNode] = field(default_factory=list)

    def __post_init__(self):
        for index, node in enumerate(self.nodes):
            check_back_edges(index, node)

    def add_node(self, node: WireNode) -> int:
        """Append a node after checking its edges. Returns the node's index."""
        index = len(self.nodes)
        check_back_edges(index, node)
        self.nodes.append(node)
        return index

    def iter_segments(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(earlier, later)`` index pairs for every connection."""
        for index, node in enumerate(self.nodes):
            for edge in node.edges:
                if 0 <= edge < index:
                    yield edge, index

    def port_refs(self) -> List[CompPortRef]:
        """Component ports this wire touches, in node order."""
        return [n.ref for n in self.nodes if isinstance(n.ref, CompPortRef)]


@dataclass
class Layout:
    """
    Components and wires of one circuit page.

    ``next_comp_id`` and ``next_wire_id`` are id counters owned by the
    editor. Import leaves them at zero and export does not write them.
    """

    components: List[Component] = field(default_factory=list)
    wires: List[WireGraph] = field(default_factory=list)
    next_comp_id: int = 0
    next_wire_id: int = 0

    def __post_init__(self):
        _check_unique("component", [c.id for c in self.components])
        _check_unique("wire", [w.id for w in self.wires])

    @property
    def is_empty(self) -> bool:
        return not self.components and not self.wires

    def get_component(self, comp_id: str) -> Optional[Component]:
        """Find a component by id."""
        for comp in self.components:
            if comp.id == comp_id:
                return comp
        return None

    def get_wire(self, wire_id: str) -> Optional[WireGraph]:
        """Find a wire by id."""
        for wire in self.wires:
            if wire.id == wire_id:
                return wire
        return None

    def add_component(self, comp: Component) -> Component:
        """Append a component, rejecting duplicate ids."""
        if self.get_component(comp.id) is not None:
            raise ValueError(f"Duplicate component id: {comp.id}")
        self.components.append(comp)
        return comp

    def add_wire(self, wire: WireGraph) -> WireGraph:
        """Append a wire, rejecting duplicate ids."""
        if self.get_wire(wire.id) is not None:
            raise ValueError(f"Duplicate wire id: {wire.id}")
        self.wires.append(wire)
        return wire


def _check_unique(kind: str, ids: List[str]) -> None:
    seen = set()
    for item_id in ids:
        if item_id in seen:
            raise ValueError(f"Duplicate {kind} id: {item_id}")
        seen.add(item_id)

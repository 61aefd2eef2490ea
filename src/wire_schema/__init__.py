"""
wire-schema: line-oriented text format for circuit layouts.

Converts between an in-memory layout (placed components plus routed wire
graphs) and a compact, hand-editable text file. Import collects issues
instead of failing, so partially broken files still load.

Modules:
    core: Layout model, numeric fields, severity types
    schema: Tokenizer, line decoders, exporter and importer
    layout_file: Load and save layout files
    config: Project and user configuration
    cli: The ``wire-schema`` command

Quick Start::

    from wire_schema import import_layout, export_layout

    result = import_layout(text)
    if result.ok:
        layout = result.layout
    else:
        for issue in result.issues:
            print(issue)

    text = export_layout(layout)
"""

__version__ = "0.1.0"

# Model
from wire_schema.core.model import (
    NO_REF,
    CompPortRef,
    Component,
    Layout,
    NoRef,
    PortRef,
    Vec2,
    WireGraph,
    WireNode,
)
from wire_schema.core.types import IssueKind, RoundTripMode, Severity

# Format
from wire_schema.schema import (
    ImportOptions,
    ImportResult,
    ImportState,
    Issue,
    export_layout,
    import_layout,
)

# Files
from wire_schema.layout_file import load_layout, save_layout

__all__ = [
    # Version
    "__version__",
    # Model
    "Vec2",
    "NoRef",
    "NO_REF",
    "CompPortRef",
    "PortRef",
    "Component",
    "WireNode",
    "WireGraph",
    "Layout",
    # Types
    "IssueKind",
    "RoundTripMode",
    "Severity",
    # Format
    "ImportOptions",
    "ImportResult",
    "ImportState",
    "Issue",
    "export_layout",
    "import_layout",
    # Files
    "load_layout",
    "save_layout",
]

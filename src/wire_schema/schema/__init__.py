"""
Wire-schema text format: tokenizer, line decoders, exporter and importer.
"""

from .decoders import decode_component_line, decode_node_list, decode_wire_line
from .exporter import HEADER_LINE, export_layout, format_component, format_node, format_wire
from .grammar import SCHEMA_VERSION
from .importer import (
    Importer,
    ImportOptions,
    ImportResult,
    ImportState,
    Issue,
    import_layout,
    normalize_text,
)
from .tokenizer import LineLexer, Part, TokenKind, tokenize_line

__all__ = [
    # Tokenizer
    "LineLexer",
    "Part",
    "TokenKind",
    "tokenize_line",
    # Decoders
    "decode_component_line",
    "decode_wire_line",
    "decode_node_list",
    # Exporter
    "HEADER_LINE",
    "SCHEMA_VERSION",
    "export_layout",
    "format_component",
    "format_node",
    "format_wire",
    # Importer
    "Importer",
    "ImportOptions",
    "ImportResult",
    "ImportState",
    "Issue",
    "import_layout",
    "normalize_text",
]

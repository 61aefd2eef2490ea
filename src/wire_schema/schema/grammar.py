"""Markers, labels and separators of wire-schema version 1."""

SCHEMA_VERSION = 1
HEADER_PREFIX = "#wire-schema"
COMMENT_PREFIX = "#"

COMPONENT_MARKER = "C"
WIRE_MARKER = "W"

POSITION_LABEL = "p"
NODES_LABEL = "ns"
PORT_LABEL = "p"

FIELD_SEPARATOR = ","
NODE_SEPARATOR = "|"
PORT_SEPARATOR = "/"

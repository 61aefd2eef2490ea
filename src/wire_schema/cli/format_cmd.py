"""Format command: rewrite a layout file in canonical form.

Usage:
    wire-schema format cpu.wires              Print canonical text to stdout
    wire-schema format cpu.wires -o out.wires Write canonical text to a file
    wire-schema format cpu.wires --in-place   Overwrite the input
    wire-schema format cpu.wires --check      Exit 1 if not canonical

Comments and blank lines are not part of the layout model, so formatting
removes them.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from wire_schema.exceptions import WireSchemaError
from wire_schema.layout_file import load_layout, save_layout
from wire_schema.schema import ImportOptions, export_layout

logger = logging.getLogger(__name__)


def run_format(args: argparse.Namespace) -> int:
    """Run the format command."""
    path = Path(args.file)

    # Compare against the canonical text directly; the importer's own check is redundant here
    options = ImportOptions(verify_round_trip=False)
    try:
        result = load_layout(path, options)
    except WireSchemaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading {path}: {e}", file=sys.stderr)
        return 2

    if result.aborted:
        for issue in result.issues:
            print(f"Error: {path}: {issue}", file=sys.stderr)
        return 2

    if result.errors and not args.force:
        for issue in result.errors:
            print(f"Error: {path}: {issue}", file=sys.stderr)
        print(
            "Refusing to format: the lines above would be dropped. Use --force to write anyway.",
            file=sys.stderr,
        )
        return 1

    canonical = export_layout(result.layout)

    if args.check:
        original = path.read_bytes().decode("utf-8")
        if original == canonical:
            return 0
        print(f"{path}: not in canonical form", file=sys.stderr)
        return 1

    if args.in_place or args.output:
        target = path if args.in_place else Path(args.output)
        save_layout(result.layout, target)
        logger.debug("Formatted %s -> %s", path, target)
        return 0

    sys.stdout.write(canonical)
    return 0

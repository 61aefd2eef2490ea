"""Check command: import a layout file and report issues.

Usage:
    wire-schema check cpu.wires
    wire-schema check cpu.wires --format json
    wire-schema check cpu.wires --normalized --strict

Exit codes:
    0  no error-severity issues (no issues at all with --strict)
    1  issues found
    2  file missing, unreadable, or bad configuration
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from pathlib import Path
from typing import List

from rich.console import Console
from rich.table import Table

from wire_schema.config import Config, ConfigError
from wire_schema.core.types import RoundTripMode, Severity
from wire_schema.exceptions import WireSchemaError
from wire_schema.layout_file import load_layout
from wire_schema.schema import ImportOptions, ImportResult, Issue


def build_import_options(args: argparse.Namespace, config: Config) -> ImportOptions:
    """Merge command-line flags over the configured importer options."""
    options = config.import_options()
    if getattr(args, "verify", None) is not None:
        options = dataclasses.replace(options, verify_round_trip=args.verify)
    if getattr(args, "round_trip_mode", None) is not None:
        options = dataclasses.replace(
            options, round_trip_mode=RoundTripMode.from_string(args.round_trip_mode)
        )
    return options


def run_check(args: argparse.Namespace, config: Config) -> int:
    """Run the check command."""
    path = Path(args.file)
    output_format = args.format or config.defaults.format
    strict = args.strict if args.strict is not None else config.import_.strict
    quiet = args.quiet if args.quiet is not None else config.defaults.quiet

    try:
        options = build_import_options(args, config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        result = load_layout(path, options)
    except WireSchemaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading {path}: {e}", file=sys.stderr)
        return 2

    if output_format == "json":
        _output_json(result, path)
    else:
        _output_table(result, path.name, quiet=quiet)

    failing = result.issues if strict else result.errors
    return 1 if failing else 0


def _output_json(result: ImportResult, path: Path) -> None:
    """Output the import result as JSON."""
    output = {
        "file": str(path),
        "state": result.state.value,
        "components": len(result.layout.components),
        "wires": len(result.layout.wires),
        "issues": [issue.to_dict() for issue in result.issues],
        "summary": {
            "total": len(result.issues),
            "errors": len(result.errors),
            "warnings": len(result.warnings),
        },
    }
    print(json.dumps(output, indent=2))


def _output_table(result: ImportResult, filename: str, quiet: bool = False) -> None:
    """Output the import result as formatted text."""
    console = Console()

    if result.ok:
        if not quiet:
            console.print(
                f"[green]{filename}: {len(result.layout.components)} component(s), "
                f"{len(result.layout.wires)} wire(s), no issues[/green]"
            )
        return

    if not quiet:
        console.print(f"\n[bold]Issues in {filename}[/bold]\n")

    console.print(_issue_table(result.issues))

    if not quiet:
        console.print()
        if result.aborted:
            console.print("[red]Import aborted: nothing after the header was read[/red]")
        else:
            console.print(
                f"Loaded {len(result.layout.components)} component(s), "
                f"{len(result.layout.wires)} wire(s): "
                f"[red]{len(result.errors)} error(s)[/red], "
                f"[yellow]{len(result.warnings)} warning(s)[/yellow]"
            )


def _issue_table(issues: List[Issue]) -> Table:
    severity_colors = {
        Severity.ERROR: "red",
        Severity.WARNING: "yellow",
    }

    table = Table(show_header=True, header_style="bold")
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Kind")
    table.add_column("Message")

    for issue in issues:
        color = severity_colors[issue.severity]
        table.add_row(
            str(issue.line_number),
            str(issue.column_number) if issue.column_number is not None else "",
            f"[{color}]{issue.kind.value}[/{color}]",
            issue.message,
        )
    return table

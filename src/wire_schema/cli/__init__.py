"""
Command-line interface for wire-schema.

    wire-schema check <file>     - Import a layout file and report issues
    wire-schema format <file>    - Rewrite a layout file in canonical form
    wire-schema config           - Show or create configuration

Examples:
    wire-schema check cpu.wires
    wire-schema check cpu.wires --format json --normalized
    wire-schema format cpu.wires --check
    wire-schema format cpu.wires -o cpu.clean.wires
    wire-schema -v check cpu.wires
"""

import argparse
import sys
from typing import List, Optional

from wire_schema import __version__

__all__ = ["main"]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the wire-schema CLI."""
    parser = argparse.ArgumentParser(
        prog="wire-schema",
        description="Check and format wire-schema layout files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"wire-schema {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Check subcommand
    check_parser = subparsers.add_parser("check", help="Import a layout file and report issues")
    check_parser.add_argument("file", help="Path to a wire-schema file")
    check_parser.add_argument("--format", choices=["table", "json"], default=None)
    check_parser.add_argument(
        "--strict", action="store_true", default=None, help="Fail on warnings too"
    )
    verify_group = check_parser.add_mutually_exclusive_group()
    verify_group.add_argument(
        "--no-verify",
        action="store_false",
        dest="verify",
        default=None,
        help="Skip the round-trip check",
    )
    verify_group.add_argument(
        "--normalized",
        action="store_const",
        const="normalized",
        dest="round_trip_mode",
        help="Ignore whitespace, blank lines and comments in the round-trip check",
    )
    verify_group.add_argument(
        "--exact",
        action="store_const",
        const="exact",
        dest="round_trip_mode",
        help="Compare the round-trip output byte for byte",
    )
    check_parser.add_argument("-q", "--quiet", action="store_true", default=None)

    # Format subcommand
    format_parser = subparsers.add_parser("format", help="Rewrite a layout file in canonical form")
    format_parser.add_argument("file", help="Path to a wire-schema file")
    format_output = format_parser.add_mutually_exclusive_group()
    format_output.add_argument("-o", "--output", help="Write to this file instead of stdout")
    format_output.add_argument(
        "--in-place", action="store_true", help="Overwrite the input file"
    )
    format_output.add_argument(
        "--check",
        action="store_true",
        help="Exit 1 if the file is not already in canonical form",
    )
    format_parser.add_argument(
        "--force",
        action="store_true",
        help="Write output even if lines were dropped during import",
    )

    # Config subcommand
    config_parser = subparsers.add_parser("config", help="Show or create configuration")
    config_action = config_parser.add_mutually_exclusive_group()
    config_action.add_argument(
        "--show", action="store_true", help="Show effective configuration with sources"
    )
    config_action.add_argument(
        "--init", action="store_true", help="Create template config file in current directory"
    )
    config_action.add_argument("--paths", action="store_true", help="Show config file paths")
    config_parser.add_argument(
        "--user",
        action="store_true",
        help="Use user config (~/.config/wire-schema/config.toml) for --init",
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "config":
        from .config_cmd import run_config

        return run_config(args)

    from wire_schema.config import Config, ConfigError
    from wire_schema.logging import enable_verbose

    try:
        config = Config.load()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.verbose or config.defaults.verbose:
        enable_verbose("DEBUG")

    if args.command == "check":
        from .check_cmd import run_check

        return run_check(args, config)

    if args.command == "format":
        from .format_cmd import run_format

        return run_format(args)

    return 0

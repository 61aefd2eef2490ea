"""
Config command for the wire-schema CLI.

Usage:
    wire-schema config            Effective settings and where each came from
    wire-schema config --init     Write a commented template to ./.wire-schema.toml
    wire-schema config --paths    Which config files would be read
"""

import argparse
import dataclasses
import sys
from pathlib import Path

from wire_schema import config as config_module
from wire_schema.config import (
    CONFIG_FILENAMES,
    SECTIONS,
    Config,
    ConfigError,
    generate_template,
    get_config_paths,
)


def run_config(args: argparse.Namespace) -> int:
    """Run the config command."""
    try:
        if args.init:
            if args.user:
                target = config_module.USER_CONFIG_PATH
            else:
                target = Path.cwd() / CONFIG_FILENAMES[0]
            return _write_template(target)
        if args.paths:
            _print_paths()
        else:
            _print_effective(Config.load())
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def _print_effective(config: Config) -> None:
    """Print the merged settings as TOML, each line tagged with its source file."""
    print("# Effective wire-schema configuration")
    for section, attr in SECTIONS.items():
        print()
        print(f"[{section}]")
        values = getattr(config, attr)
        for f in dataclasses.fields(values):
            source = config.get_source(f"{section}.{f.name}")
            origin = source if source == "default" else Path(source).name
            print(f"{f.name} = {_toml_value(getattr(values, f.name))}  # from: {origin}")


def _toml_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def _print_paths() -> None:
    paths = get_config_paths()
    user_status = "found" if paths["user"] else "not found"
    print(f"User config: {config_module.USER_CONFIG_PATH} ({user_status})")
    print(f"Project config search: {', '.join(CONFIG_FILENAMES)}")
    print(f"  {paths['project'] or 'not found'}")


def _write_template(target: Path) -> int:
    if target.exists():
        print(f"Error: {target} already exists; edit or remove it first", file=sys.stderr)
        return 1
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(generate_template(), encoding="utf-8")
    except OSError as e:
        print(f"Error: cannot write {target}: {e}", file=sys.stderr)
        return 1
    print(f"Created {target}")
    return 0

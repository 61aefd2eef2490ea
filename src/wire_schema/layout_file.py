"""
File I/O for wire-schema layouts.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from wire_schema.core.model import Layout
from wire_schema.exceptions import FileNotFoundError as WireSchemaFileNotFoundError
from wire_schema.schema import ImportOptions, ImportResult, export_layout, import_layout

logger = logging.getLogger(__name__)

LAYOUT_SUFFIX = ".wires"


def load_layout(
    path: str | Path,
    options: Optional[ImportOptions] = None,
    strict: bool = False,
) -> ImportResult:
    """
    Load a wire-schema file.

    Args:
        path: Path to the layout file
        options: Importer settings
        strict: Raise instead of returning a result with error issues

    Returns:
        ImportResult with the layout and any issues

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If strict and the import reported errors
    """
    path = Path(path)
    if not path.is_file():
        raise WireSchemaFileNotFoundError(
            "Layout file not found",
            context={"file": str(path)},
            suggestions=[
                "Check that the file path is correct",
                f"Layout files usually have a {LAYOUT_SUFFIX} extension",
            ],
        )

    # newline="" keeps CRLF so the round-trip check sees the real bytes
    with open(path, encoding="utf-8", newline="") as f:
        text = f.read()
    result = import_layout(text, options)
    logger.info("Loaded %s: %d issue(s)", path, len(result.issues))

    if strict:
        result.raise_for_issues(file_path=str(path))
    return result


def save_layout(layout: Layout, path: str | Path) -> None:
    """
    Save a layout as wire-schema text.

    Args:
        layout: Layout to write
        path: Destination path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(export_layout(layout))
    logger.info(
        "Saved %s: %d component(s), %d wire(s)", path, len(layout.components), len(layout.wires)
    )

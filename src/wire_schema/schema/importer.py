"""
Importer for wire-schema text.

Reads a whole file, collecting issues instead of stopping at the first
problem:

    AWAITING_HEADER -> PROCESSING_BODY -> DONE
                    \\-> ABORTED   (bad header or unsupported version)

A bad header aborts with a single issue and an empty layout. In the body
every failure is local to its line. When round-trip verification is on,
the finished layout is exported again and compared with the input; a
difference adds one warning-severity issue on line 1 and is logged.

Usage::

    from wire_schema import import_layout

    result = import_layout(text)
    for issue in result.issues:
        print(issue)
    layout = result.layout
"""

from __future__ import annotations

import difflib
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from wire_schema.core.model import Layout
from wire_schema.core.numbers import parse_index
from wire_schema.core.types import IssueKind, RoundTripMode, Severity
from wire_schema.exceptions import FieldError, FormatError, LineError, ParseError, ValidationError

from .decoders import decode_component_line, decode_wire_line
from .exporter import export_layout
from .grammar import COMMENT_PREFIX, COMPONENT_MARKER, HEADER_PREFIX, SCHEMA_VERSION, WIRE_MARKER
from .tokenizer import tokenize_line

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(re.escape(HEADER_PREFIX) + r"\s+(\S+)")

ROUND_TRIP_MESSAGE = "Exported data does not match imported data"


class ImportState(str, Enum):
    """Importer progress."""

    AWAITING_HEADER = "awaiting_header"
    PROCESSING_BODY = "processing_body"
    DONE = "done"
    ABORTED = "aborted"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Issue:
    """
    One problem found during import.

    Attributes:
        message: Human-readable description
        line_number: 1-based line the issue belongs to
        line_text: That line as it appears in the input
        column_number: 1-based column, when known
        kind: Layer that produced the issue
        severity: Defaults from ``kind`` (round-trip issues are warnings)
    """

    message: str
    line_number: int
    line_text: str
    column_number: Optional[int] = None
    kind: IssueKind = IssueKind.LINE
    severity: Optional[Severity] = None

    def __post_init__(self):
        if self.severity is None:
            object.__setattr__(self, "severity", self.kind.default_severity)

    def __str__(self) -> str:
        location = f"line {self.line_number}"
        if self.column_number is not None:
            location += f", column {self.column_number}"
        return f"{location}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "line_number": self.line_number,
            "line_text": self.line_text,
            "column_number": self.column_number,
            "kind": self.kind.value,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class ImportOptions:
    """
    Importer settings.

    Attributes:
        verify_round_trip: Re-export the result and compare with the input
        round_trip_mode: EXACT compares text byte for byte. NORMALIZED
            ignores line endings, extra whitespace, blank lines and comments.
    """

    verify_round_trip: bool = True
    round_trip_mode: RoundTripMode = RoundTripMode.EXACT


@dataclass
class ImportResult:
    """Layout and issues produced by one import."""

    layout: Layout
    issues: List[Issue] = field(default_factory=list)
    state: ImportState = ImportState.DONE

    @property
    def ok(self) -> bool:
        """True when there were no issues at all."""
        return not self.issues

    @property
    def aborted(self) -> bool:
        return self.state is ImportState.ABORTED

    @property
    def errors(self) -> List[Issue]:
        return [i for i in self.issues if i.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[Issue]:
        return [i for i in self.issues if i.severity is Severity.WARNING]

    def issues_for_line(self, line_number: int) -> List[Issue]:
        return [i for i in self.issues if i.line_number == line_number]

    def raise_for_issues(self, include_warnings: bool = False, file_path: Optional[str] = None) -> None:
        """
        Raise ValidationError if the import produced errors.

        Args:
            include_warnings: Also fail on warning-severity issues
            file_path: Added to the error context
        """
        failing = self.issues if include_warnings else self.errors
        if not failing:
            return
        context = {"file": file_path} if file_path else None
        raise ValidationError([str(i) for i in failing], context=context)


def normalize_text(text: str) -> str:
    """
    Reduce a wire-schema file to the form the importer actually reads.

    Line endings become LF, runs of whitespace collapse to one space, blank
    lines and comment lines after the header are dropped, and the result
    ends with exactly one newline.
    """
    lines = text.replace("\r\n", "\n").split("\n")
    out = []
    for i, line in enumerate(lines):
        collapsed = " ".join(line.split())
        if not collapsed:
            continue
        if i > 0 and collapsed.startswith(COMMENT_PREFIX):
            continue
        out.append(collapsed)
    return "\n".join(out) + "\n"


class Importer:
    """Single-use importer for one text."""

    def __init__(self, text: str, options: Optional[ImportOptions] = None):
        self.text = text
        self.options = options or ImportOptions()
        self.lines = text.split("\n")
        self.layout = Layout()
        self.issues: List[Issue] = []
        self.state = ImportState.AWAITING_HEADER

    def run(self) -> ImportResult:
        """Process the whole text and return the result."""
        try:
            self._read_header()
        except FormatError as e:
            self._add_issue(e, IssueKind.FORMAT, 0)
            self.state = ImportState.ABORTED
            logger.debug("Import aborted: %s", e.message)
            return ImportResult(layout=Layout(), issues=self.issues, state=self.state)

        self.state = ImportState.PROCESSING_BODY
        for line_idx in range(1, len(self.lines)):
            self._process_line(line_idx)
        self.state = ImportState.DONE

        if self.options.verify_round_trip:
            self._verify_round_trip()

        logger.debug(
            "Imported %d component(s) and %d wire(s) with %d issue(s)",
            len(self.layout.components),
            len(self.layout.wires),
            len(self.issues),
        )
        return ImportResult(layout=self.layout, issues=self.issues, state=self.state)

    def _read_header(self) -> None:
        header = self.lines[0].strip()
        match = _HEADER_RE.fullmatch(header)
        if match is None or parse_index(match.group(1)) is None:
            raise FormatError(
                f"Invalid file format: first line must be {HEADER_PREFIX} <version>",
                line=1,
                suggestions=[f"Start the file with '{HEADER_PREFIX} {SCHEMA_VERSION}'"],
            )
        version = parse_index(match.group(1))
        if version != SCHEMA_VERSION:
            raise FormatError(
                f"Invalid file format: only version {SCHEMA_VERSION} is supported",
                line=1,
                context={"version": version},
            )

    def _process_line(self, line_idx: int) -> None:
        raw = self.lines[line_idx]
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            return

        indent = len(raw) - len(raw.lstrip())
        line_number = line_idx + 1
        parts = tokenize_line(line)
        marker = parts[0].raw_text if parts else line[0]

        # Field errors only count if the line as a whole survives
        pending: List[FieldError] = []
        try:
            if marker == COMPONENT_MARKER:
                comp = decode_component_line(parts, line_number, self.layout, pending.append)
                self.layout.add_component(comp)
            elif marker == WIRE_MARKER:
                wire = decode_wire_line(parts, line_number, self.layout, pending.append)
                self.layout.add_wire(wire)
            else:
                raise LineError(f"Unexpected line start: '{marker}'", line=line_number, column=1)
        except LineError as e:
            self._add_issue(e, IssueKind.LINE, line_idx, indent)
            return

        for error in pending:
            self._add_issue(error, IssueKind.FIELD, line_idx, indent)

    def _verify_round_trip(self) -> None:
        exported = export_layout(self.layout)
        original = self.text
        if self.options.round_trip_mode is RoundTripMode.NORMALIZED:
            original = normalize_text(original)
            exported = normalize_text(exported)
        if exported == original:
            return

        self.issues.append(
            Issue(
                message=ROUND_TRIP_MESSAGE,
                line_number=1,
                line_text=self.lines[0],
                kind=IssueKind.ROUND_TRIP,
            )
        )
        logger.warning("%s (%s comparison)", ROUND_TRIP_MESSAGE, self.options.round_trip_mode)
        if logger.isEnabledFor(logging.DEBUG):
            diff = difflib.unified_diff(
                original.splitlines(keepends=True),
                exported.splitlines(keepends=True),
                fromfile="input",
                tofile="export",
            )
            logger.debug("Round-trip diff:\n%s", "".join(diff))

    def _add_issue(self, error: ParseError, kind: IssueKind, line_idx: int, indent: int = 0) -> None:
        column = error.column + indent if error.column is not None else None
        self.issues.append(
            Issue(
                message=error.message,
                line_number=line_idx + 1,
                line_text=self.lines[line_idx],
                column_number=column,
                kind=kind,
            )
        )


def import_layout(text: str, options: Optional[ImportOptions] = None) -> ImportResult:
    """
    Parse wire-schema text into a Layout.

    Never raises for bad input; every problem is returned as an Issue.

    Args:
        text: Full file contents
        options: Importer settings (default: verify with exact comparison)

    Returns:
        ImportResult with the layout (empty if the header was rejected)
        and the ordered issue list
    """
    return Importer(text, options).run()


__all__ = [
    "Importer",
    "ImportOptions",
    "ImportResult",
    "ImportState",
    "Issue",
    "import_layout",
    "normalize_text",
]

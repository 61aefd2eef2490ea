"""
Exceptions raised by wire-schema.

Every exception carries a message plus optional ``context`` (file, line,
column, offending value) and ``suggestions``, all rendered by ``str()``::

    Invalid component line: p: must have 2 numbers

    Context:
      line: 3
      column: 11

The decoders raise ``LineError`` and ``FieldError``; the importer turns them
into ``Issue`` records, so they never escape ``import_layout``. File helpers
and the configuration loader raise the other classes to their callers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class WireSchemaError(Exception):
    """
    Base class for wire-schema errors.

    Attributes:
        message: The bare message, without context or suggestions
        context: Facts about where the error happened
        suggestions: Things the user can try
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        lines = [self.message]
        if self.context:
            lines += ["", "Context:"]
            lines += [f"  {key}: {value}" for key, value in self.context.items()]
        if self.suggestions:
            lines += ["", "Suggestions:"]
            lines += [f"  - {suggestion}" for suggestion in self.suggestions]
        return "\n".join(lines)

    def __str__(self) -> str:
        return self._format_message()


class ParseError(WireSchemaError):
    """
    Text that does not follow the wire-schema grammar.

    ``line`` and ``column`` are 1-based. Together with ``file_path`` they are
    copied into the context unless the context already names them.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        file_path: Optional[Union[str, Path]] = None,
    ):
        self.line = line
        self.column = column

        ctx = dict(context or {})
        location = (
            ("file", str(file_path) if file_path else None),
            ("line", line),
            ("column", column),
        )
        for key, value in location:
            if value is not None:
                ctx.setdefault(key, value)
        super().__init__(message, ctx, suggestions)


class FormatError(ParseError):
    """Bad or unsupported header. Nothing after it is read."""


class LineError(ParseError):
    """A component or wire line that cannot produce a record. The line is dropped."""


class FieldError(ParseError):
    """A bad field inside a usable line. Only that field or wire node is dropped."""


class ValidationError(WireSchemaError):
    """
    An import that reported issues, raised on request.

    ``ImportResult.raise_for_issues()`` and ``load_layout(strict=True)``
    raise this with every failing issue, numbered::

        Validation failed with 2 error(s):
          1. line 2, column 1: Invalid component line: must have at least 3 parts
          2. line 4, column 1: Unexpected line start: 'X'

    Attributes:
        errors: One string per issue
    """

    def __init__(
        self,
        errors: List[str],
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.errors = errors
        numbered = [f"  {i}. {error}" for i, error in enumerate(errors, start=1)]
        message = "\n".join([f"Validation failed with {len(errors)} error(s):", *numbered])
        super().__init__(message, context, suggestions)


class FileNotFoundError(WireSchemaError):
    """A layout file that does not exist."""


class ConfigurationError(WireSchemaError):
    """A configuration value that is present but unusable."""


__all__ = [
    "WireSchemaError",
    "ParseError",
    "FormatError",
    "LineError",
    "FieldError",
    "ValidationError",
    "FileNotFoundError",
    "ConfigurationError",
]

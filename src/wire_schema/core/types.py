"""Canonical enum definitions for wire-schema.

- Severity: how serious an import issue is (ERROR, WARNING)
- IssueKind: which layer produced an issue (FORMAT, LINE, FIELD, ROUND_TRIP)
- RoundTripMode: how the importer compares its re-export with the input
"""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Issue severity levels.

    Uses string values for JSON serialization compatibility.
    """

    ERROR = "error"
    WARNING = "warning"

    def __str__(self) -> str:
        return self.value


class IssueKind(str, Enum):
    """Origin of an import issue.

    FORMAT issues abort the import. LINE issues drop a whole line, FIELD
    issues drop one field or wire node. ROUND_TRIP issues are diagnostics
    from the post-import re-export check.
    """

    FORMAT = "format"
    LINE = "line"
    FIELD = "field"
    ROUND_TRIP = "round_trip"

    def __str__(self) -> str:
        return self.value

    @property
    def default_severity(self) -> Severity:
        if self is IssueKind.ROUND_TRIP:
            return Severity.WARNING
        return Severity.ERROR


class RoundTripMode(str, Enum):
    """Strictness of the importer's round-trip comparison."""

    EXACT = "exact"
    NORMALIZED = "normalized"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, s: str) -> "RoundTripMode":
        """Parse a mode name, raising ValueError for unknown names."""
        try:
            return cls(s.lower().strip())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown round-trip mode '{s}' (expected one of: {valid})") from None

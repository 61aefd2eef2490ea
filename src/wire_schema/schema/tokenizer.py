"""
Line tokenizer for the wire-schema format.

Splits one line into parts. A part is an optional ``label:`` prefix
followed by either a bracketed value or a bare atom:

    C ram 0 p:-12,-23
    -> [C] [ram] [0] [p: -12,-23]

    W 3 ns:[13,6 p:id/rhsImm|22,6,0]
    -> [W] [3] [ns: "13,6 p:id/rhsImm|22,6,0" (bracket)]

Bracket interiors are returned unsplit; the node-list decoder re-tokenizes
them. The lexer never raises. Malformed input produces whatever parts can be
recognized and the decoders report the problem.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

# Characters that end a bare atom (besides whitespace)
ATOM_TERMINATORS = "[]:"

# Characters skipped when they appear where a part should start
STRAY_CHARS = "]:"


class TokenKind(str, Enum):
    """Shape of a part's value."""

    ATOM = "atom"
    BRACKET = "bracket"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Part:
    """
    One whitespace-separated part of a line.

    Attributes:
        raw_text: The part exactly as written, label and brackets included
        label: Label before the colon, or None
        value: The value with brackets stripped
        kind: ATOM or BRACKET
        column: 1-based column where the part starts
        value_column: 1-based column where ``value`` starts
        terminated: False when a bracket was never closed
    """

    raw_text: str
    label: Optional[str]
    value: str
    kind: TokenKind
    column: int
    value_column: int
    terminated: bool = True

    @property
    def is_labeled(self) -> bool:
        return self.label is not None

    @property
    def is_plain_atom(self) -> bool:
        """True for an unlabeled, non-bracket part such as an id."""
        return self.label is None and self.kind is TokenKind.ATOM


class LineLexer:
    """Explicit lexer for a single wire-schema line."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def tokenize(self) -> List[Part]:
        """Return every part of the line in order."""
        parts: List[Part] = []
        while True:
            self._skip_separators()
            if self.pos >= self.length:
                break
            parts.append(self._lex_part())
        return parts

    def _skip_separators(self) -> None:
        """Skip whitespace and stray closing brackets or colons."""
        while self.pos < self.length:
            c = self.text[self.pos]
            if c.isspace() or c in STRAY_CHARS:
                self.pos += 1
            else:
                break

    def _lex_part(self) -> Part:
        start = self.pos
        label = self._lex_label()

        if self.pos < self.length and self.text[self.pos] == "[":
            value, value_start, terminated = self._lex_bracket()
            kind = TokenKind.BRACKET
        else:
            value_start = self.pos
            value = self._lex_atom()
            terminated = True
            kind = TokenKind.ATOM

        return Part(
            raw_text=self.text[start : self.pos],
            label=label,
            value=value,
            kind=kind,
            column=start + 1,
            value_column=value_start + 1,
            terminated=terminated,
        )

    def _lex_label(self) -> Optional[str]:
        """Consume ``word:`` if present. Leaves pos unchanged otherwise."""
        end = self.pos
        while end < self.length and (self.text[end].isalnum() or self.text[end] == "_"):
            end += 1
        if end > self.pos and end < self.length and self.text[end] == ":":
            label = self.text[self.pos : end]
            self.pos = end + 1
            return label
        return None

    def _lex_bracket(self) -> tuple[str, int, bool]:
        """Consume ``[...]``. An unclosed bracket runs to the end of the line."""
        assert self.text[self.pos] == "["
        value_start = self.pos + 1
        close = self.text.find("]", value_start)
        if close == -1:
            self.pos = self.length
            return self.text[value_start:], value_start, False
        self.pos = close + 1
        return self.text[value_start:close], value_start, True

    def _lex_atom(self) -> str:
        """Consume a bare atom. May be empty directly after a label."""
        start = self.pos
        while self.pos < self.length:
            c = self.text[self.pos]
            if c.isspace() or c in ATOM_TERMINATORS:
                break
            self.pos += 1
        return self.text[start : self.pos]


def tokenize_line(text: str) -> List[Part]:
    """Tokenize one (already trimmed) line into parts."""
    return LineLexer(text).tokenize()

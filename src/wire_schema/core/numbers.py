"""
Numeric fields of the wire-schema grammar.

Coordinates are plain decimals (``-12``, ``3.5``, ``.25``) with no exponent
and no ``inf``/``nan``. Edge indices are unsigned integers. Formatting is the
inverse of parsing: integral values print without a decimal point and all
other values print in the shortest positional form that reads back to the
same float.
"""

from __future__ import annotations

import math
import re
from typing import Optional

import numpy as np

_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")
_INDEX_RE = re.compile(r"[0-9]+")


def parse_decimal(text: str) -> Optional[float]:
    """Parse a coordinate field, returning None if it is not a plain decimal."""
    text = text.strip()
    if not _DECIMAL_RE.fullmatch(text):
        return None
    value = float(text)
    # Very long digit strings overflow to inf
    if not math.isfinite(value):
        return None
    return value


def parse_index(text: str) -> Optional[int]:
    """Parse a back-edge index, returning None if it is not an unsigned integer."""
    text = text.strip()
    if not _INDEX_RE.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:
        # Past the interpreter's int conversion limit
        return None


def format_number(value: float) -> str:
    """
    Format a coordinate for export.

    Args:
        value: A finite number

    Returns:
        ``"12"`` for 12.0, ``"0"`` for -0.0, ``"0.1"`` for 0.1, ``"0.00001"``
        for 1e-05. Never uses exponent notation.

    Raises:
        ValueError: If value is NaN or infinite
    """
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite coordinate: {value}")
    if value == int(value):
        return str(int(value))
    return np.format_float_positional(value, unique=True, trim="-")

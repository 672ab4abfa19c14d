"""Strict numeric parsing for scheduler-reported values."""

import math
import re

from gridstat.core.exceptions import ParseError

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_int(text: str, bits: int = 64) -> int:
    """Parse a base-10 signed integer that fits in *bits* bits.

    Underscores, whitespace and non-ASCII digits are rejected.

    Raises:
        ParseError: If *text* is not an integer or is out of range.
    """
    if not _INT_RE.fullmatch(text):
        raise ParseError(f"Invalid integer: {text!r}")
    value = int(text, 10)
    limit = 2 ** (bits - 1)
    if not -limit <= value < limit:
        raise ParseError(f"Integer out of {bits}-bit range: {text!r}")
    return value


def parse_float(text: str) -> float:
    """Parse a finite decimal float such as ``0.35`` or ``1e3``.

    Raises:
        ParseError: If *text* is not a decimal float or overflows.
    """
    if not _FLOAT_RE.fullmatch(text):
        raise ParseError(f"Invalid float: {text!r}")
    value = float(text)
    if not math.isfinite(value):
        raise ParseError(f"Float out of range: {text!r}")
    return value

"""Storage value parsing for scaled memory metrics (e.g. ``10.2G``)."""

from __future__ import annotations

from dataclasses import dataclass

from gridstat.core.exceptions import ParseError, UnsupportedUnitError
from gridstat.core.numbers import parse_float

# Decimal scale factors, matching how qstat reports host memory
SCALE_FACTORS: dict[str, int] = {
    "K": 1000,
    "M": 1000**2,
    "G": 1000**3,
    "T": 1000**4,
}


@dataclass(frozen=True)
class StorageValue:
    """A storage metric broken down so it can be compared in bytes.

    Attributes:
        size: Magnitude as reported, before scaling
        scale: Unit suffix (``K``, ``M``, ``G`` or ``T``)
        bytes: Absolute byte count, truncated to an integer
    """

    size: float
    scale: str
    bytes: int

    def to_dict(self) -> dict[str, float | str | int]:
        return {"size": self.size, "scale": self.scale, "bytes": self.bytes}

    def __str__(self) -> str:
        return f"{self.size:g}{self.scale}"


def parse_storage_value(text: str) -> StorageValue:
    """Parse a scaled storage string into a :class:`StorageValue`.

    The final character is the unit and the remainder a decimal float::

        >>> parse_storage_value("10.2G").bytes
        10200000000

    Raises:
        ParseError: If *text* is empty or the magnitude is not a finite
            decimal float.
        UnsupportedUnitError: If the unit suffix is not one of K/M/G/T.
    """
    text = text.strip()
    if not text:
        raise ParseError("Cannot parse an empty storage value")

    scale = text[-1]
    remainder = text[:-1]
    try:
        size = parse_float(remainder)
    except ParseError as exc:
        raise ParseError(f"Invalid storage magnitude in {text!r}") from exc

    factor = SCALE_FACTORS.get(scale)
    if factor is None:
        raise UnsupportedUnitError(f"Unsupported storage unit {scale!r} in {text!r}")

    # Round before truncating so 10.2 * 10**9 does not land on ...999
    return StorageValue(size=size, scale=scale, bytes=int(round(size * factor, 6)))

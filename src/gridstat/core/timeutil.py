"""Time parsing utilities for scheduler timestamps and CLI options."""

import re
from datetime import datetime, timedelta

_RELATIVE_RE = re.compile(r"^(\d+)([smhd])$")

_UNITS: dict[str, str] = {
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def parse_timestamp(value: str) -> datetime:
    """Parse a qstat ``-xml`` timestamp such as ``2024-01-01T10:00:00``.

    Raises:
        ValueError: If *value* is not an ISO-8601 timestamp.
    """
    return datetime.fromisoformat(value.strip())


def parse_since(value: str) -> datetime:
    """Parse a ``--submitted-after``/``--submitted-before`` value.

    Accepted formats:

    * **Relative** – ``"30m"``, ``"2h"``, ``"1d"``, ``"90s"``
      (digits followed by one of ``s/m/h/d``), counted back from now.
    * **Absolute** – any string accepted by :func:`datetime.fromisoformat`,
      e.g. ``"2026-02-23T18:00:00"`` or ``"2026-02-23 18:00"``.

    Raises:
        ValueError: If *value* cannot be parsed as either format.
    """
    match = _RELATIVE_RE.match(value.strip())
    if match:
        amount = int(match.group(1))
        unit = _UNITS[match.group(2)]
        return datetime.now() - timedelta(**{unit: amount})

    try:
        return parse_timestamp(value)
    except ValueError:
        pass

    raise ValueError(
        f"Invalid time value: {value!r}. "
        "Use a relative duration (e.g. 30m, 2h, 1d) or an ISO timestamp."
    )

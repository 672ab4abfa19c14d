"""Task array identity for Grid Engine jobs.

qstat reports the ``tasks`` field in one of two forms:

* a plain task id, e.g. ``42``, for a single running array task;
* a compressed range, e.g. ``40-55:5``, for pending array tasks
  (tasks 40 to 55 stepping by 5).

:class:`Task` keeps the raw text so both forms re-encode losslessly.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from gridstat.core.exceptions import DomainError, ParseError
from gridstat.core.numbers import parse_int

logger = logging.getLogger(__name__)

TASK_RANGE_RE = re.compile(r"([0-9]+)-([0-9]+):([0-9]+)")


@dataclass(frozen=True)
class TaskRange:
    """A decoded ``start-end:step`` task range.

    Attributes:
        start: First task id
        end: Last task id (inclusive)
        step: Increment between task ids, always positive
    """

    start: int
    end: int
    step: int

    @classmethod
    def parse(cls, text: str) -> TaskRange:
        """Parse the first ``start-end:step`` expression found in *text*.

        Raises:
            DomainError: If *text* holds no range or the step is not positive.
            ParseError: If a component does not fit in 64 bits.
        """
        match = TASK_RANGE_RE.search(text)
        if match is None:
            raise DomainError(f"Task source {text!r} does not indicate a range of tasks")

        try:
            start_id, end_id, step = (parse_int(g) for g in match.groups())
        except ParseError as exc:
            raise ParseError(f"Invalid task range {match.group(0)!r}: {exc}") from exc
        if step <= 0:
            raise DomainError(f"Task range {match.group(0)!r} has a non-positive step")

        return cls(start=start_id, end=end_id, step=step)

    def ids(self) -> range:
        """Task ids covered by the range, ascending."""
        return range(self.start, self.end + 1, self.step)

    def __len__(self) -> int:
        return len(self.ids())

    def __str__(self) -> str:
        return f"{self.start}-{self.end}:{self.step}"


@dataclass
class Task:
    """The mixed-format ``tasks`` field of a job.

    Attributes:
        source: Raw text as reported; a plain integer or a range expression
        task_id: Typed task id; only populated from a plain ``source``,
            or assigned when a range job is expanded
    """

    source: str = ""
    task_id: int = 0

    @classmethod
    def decode(cls, text: str | None) -> Task:
        """Decode the raw text of a ``tasks`` element.

        Raises:
            ParseError: If a non-range value is not a 64-bit base-10 integer.
        """
        if text is None:
            return cls()

        task = cls(source=text)
        if ":" in text:
            return task

        try:
            task.task_id = parse_int(text.strip())
        except ParseError as exc:
            logger.error("Attempting to parse task identifier %r failed", text)
            raise ParseError(f"Invalid task identifier: {text!r}") from exc
        return task

    def encode(self) -> str | None:
        """Render the task back to its reported text.

        Range expressions are returned verbatim. A zero task id means
        "no task" and encodes as None.
        """
        if self.is_range:
            return self.source
        if self.task_id == 0:
            return None
        return str(self.task_id)

    @property
    def is_range(self) -> bool:
        """Whether the source uses the compressed range form."""
        return ":" in self.source

    @property
    def range(self) -> TaskRange | None:
        """Decoded range, or None for a plain task."""
        if not contains_task_range(self.source):
            return None
        return TaskRange.parse(self.source)

    def __bool__(self) -> bool:
        return bool(self.source) or self.task_id != 0


def contains_task_range(source: str) -> bool:
    """Whether *source* contains a ``start-end:step`` substring."""
    return TASK_RANGE_RE.search(source) is not None

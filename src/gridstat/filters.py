"""Time-window predicates for :meth:`gridstat.core.job.JobList.filter`.

A job whose timestamp is missing or unusable never matches. Unusable
covers text that does not parse and offset-aware values held against naive
bounds.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from gridstat.core.job import Job
from gridstat.core.timeutil import parse_timestamp

logger = logging.getLogger(__name__)

JobPredicate = Callable[[Job], bool]


def _job_time(job: Job, attr: str) -> datetime | None:
    raw = getattr(job, attr)
    if not raw:
        return None
    try:
        return parse_timestamp(raw)
    except ValueError:
        logger.debug("Job %s: unparsable %s %r, excluded", job.job_number, attr, raw)
        return None


def _window(attr: str, start: datetime | None, end: datetime | None) -> JobPredicate:
    def predicate(job: Job) -> bool:
        when = _job_time(job, attr)
        if when is None:
            return False
        try:
            if start is not None and not when > start:
                return False
            if end is not None and not when < end:
                return False
        except TypeError:
            # Offset-aware and naive datetimes do not compare
            logger.debug(
                "Job %s: %s %r not comparable with the window, excluded",
                job.job_number,
                attr,
                getattr(job, attr),
            )
            return False
        return True

    return predicate


def submitted_before(t: datetime) -> JobPredicate:
    """Jobs submitted strictly before *t*."""
    return _window("submitted_time", None, t)


def submitted_after(t: datetime) -> JobPredicate:
    """Jobs submitted strictly after *t*."""
    return _window("submitted_time", t, None)


def submitted_between(start: datetime, end: datetime) -> JobPredicate:
    """Jobs submitted strictly between *start* and *end*."""
    return _window("submitted_time", start, end)


def started_before(t: datetime) -> JobPredicate:
    return _window("start_time", None, t)


def started_after(t: datetime) -> JobPredicate:
    return _window("start_time", t, None)


def started_between(start: datetime, end: datetime) -> JobPredicate:
    return _window("start_time", start, end)


def has_state(*states: str) -> JobPredicate:
    """Jobs whose state code is one of *states*."""
    wanted = set(states)
    return lambda job: job.state in wanted


def owned_by(owner: str) -> JobPredicate:
    return lambda job: job.owner == owner

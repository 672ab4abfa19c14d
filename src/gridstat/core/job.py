"""Job records reported by qstat and collection operations over them."""

from __future__ import annotations

import dataclasses
import functools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, overload

from gridstat.core.exceptions import DomainError
from gridstat.core.task import Task, TaskRange, contains_task_range

if TYPE_CHECKING:
    from gridstat.schedulers.sge.parser import JobInfo

JobPredicate = Callable[["Job"], bool]
IndexLess = Callable[[int, int], bool]


@dataclass
class Job:
    """One Grid Engine job, or one array task slot after expansion.

    Attributes:
        job_number: Scheduler-assigned job id (``JB_job_number``)
        state: Single-letter state code, e.g. ``r`` or ``qw``
        state_attribute: The ``state`` XML attribute, e.g. ``running``
        priority: Job priority (``JAT_prio``)
        name: Job name (``JB_name``)
        owner: Submitting user (``JB_owner``)
        start_time: Raw ``JAT_start_time`` timestamp, running jobs only
        submitted_time: Raw ``JB_submission_time`` timestamp, pending jobs only
        slots: Requested slot count
        tasks: Array task identity
        queue_name: Queue instance the job runs in, when reported
    """

    job_number: int = 0
    state: str = ""
    state_attribute: str = ""
    priority: float = 0.0
    name: str = ""
    owner: str = ""
    start_time: str = ""
    submitted_time: str = ""
    slots: int = 0
    tasks: Task = field(default_factory=Task)
    queue_name: str | None = None

    @property
    def is_running(self) -> bool:
        return self.state == "r"

    @property
    def job_id(self) -> str:
        """Job id in ``<number>.<task>`` form when a single task is known."""
        if self.tasks.task_id:
            return f"{self.job_number}.{self.tasks.task_id}"
        return str(self.job_number)

    def clone(self, **changes: Any) -> Job:
        """Copy the job, giving the clone its own Task."""
        if "tasks" not in changes:
            changes["tasks"] = dataclasses.replace(self.tasks)
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the field names used by downstream consumers."""
        data: dict[str, Any] = {
            "state_attribute_text": self.state_attribute,
            "state": self.state,
            "jb_job_number": self.job_number,
            "jat_prio": self.priority,
            "jb_name": self.name,
            "jb_owner": self.owner,
            "start_time": self.start_time,
            "submitted_time": self.submitted_time,
            "slots": self.slots,
        }
        tasks = self.tasks.encode()
        if tasks is not None:
            data["tasks"] = tasks
        if self.queue_name is not None:
            data["queue_name"] = self.queue_name
        return data


class JobList:
    """Ordered sequence of jobs supporting fluent filter/sort/map.

    ``filter`` and ``map`` return new lists; ``sort`` and ``sort_by``
    reorder in place and return the same list. Not internally
    synchronized: concurrent readers are fine, writers need a single
    writer or external locking.
    """

    def __init__(self, jobs: Iterable[Job] = ()) -> None:
        self._jobs: list[Job] = list(jobs)

    def filter(self, predicate: JobPredicate) -> JobList:
        """Return the jobs for which *predicate* is true, in order."""
        return JobList(job for job in self._jobs if predicate(job))

    def sort(self, less: IndexLess) -> JobList:
        """Sort in place with a less-than comparator over positions.

        ``less(i, j)`` compares the jobs at positions *i* and *j* of the
        list as it stood before sorting.
        """

        def compare(i: int, j: int) -> int:
            if less(i, j):
                return -1
            if less(j, i):
                return 1
            return 0

        order = sorted(range(len(self._jobs)), key=functools.cmp_to_key(compare))
        self._jobs[:] = [self._jobs[i] for i in order]
        return self

    def sort_by(self, key: Callable[[Job], Any], reverse: bool = False) -> JobList:
        """Stable in-place sort by a key function."""
        self._jobs.sort(key=key, reverse=reverse)
        return self

    def map(self, fn: Callable[[Job], Job]) -> JobList:
        return JobList(fn(job) for job in self._jobs)

    def expand_tasks(self) -> JobList:
        """Replace each range-bearing job with one job per task id."""
        expanded: list[Job] = []
        for job in self._jobs:
            if does_job_contain_task_range(job):
                expanded.extend(extrapolate_tasks_to_jobs(job))
            else:
                expanded.append(job)
        return JobList(expanded)

    def append(self, job: Job) -> None:
        self._jobs.append(job)

    def extend(self, jobs: Iterable[Job]) -> None:
        self._jobs.extend(jobs)

    def to_dicts(self) -> list[dict[str, Any]]:
        return [job.to_dict() for job in self._jobs]

    def __iter__(self) -> Iterator[Job]:
        return iter(self._jobs)

    def __len__(self) -> int:
        return len(self._jobs)

    @overload
    def __getitem__(self, index: int) -> Job: ...

    @overload
    def __getitem__(self, index: slice) -> JobList: ...

    def __getitem__(self, index: int | slice) -> Job | JobList:
        if isinstance(index, slice):
            return JobList(self._jobs[index])
        return self._jobs[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JobList):
            return self._jobs == other._jobs
        if isinstance(other, list):
            return self._jobs == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"JobList({self._jobs!r})"


def filter_jobs(jobs: Iterable[Job], predicate: JobPredicate) -> JobList:
    """Filter any iterable of jobs into a new :class:`JobList`."""
    return JobList(jobs).filter(predicate)


def does_job_contain_task_range(job: Job) -> bool:
    """Whether the job's tasks field contains a ``start-end:step`` range."""
    return contains_task_range(job.tasks.source)


def extrapolate_tasks_to_jobs(original: Job) -> JobList:
    """Expand a range-bearing job into one job per task id.

    Each clone keeps every field of *original* and the range ``source``,
    with ``tasks.task_id`` set to its own id. Jobs come back in ascending
    task id order; a range whose start exceeds its end yields no jobs.

    Raises:
        DomainError: If the job holds no task range or the step is not positive.
        ParseError: If a range component does not fit in 64 bits.
    """
    if not does_job_contain_task_range(original):
        raise DomainError(
            f"Job {original.job_number} does not indicate a range of tasks: "
            f"{original.tasks.source!r}"
        )

    task_range = TaskRange.parse(original.tasks.source)
    return JobList(
        original.clone(tasks=Task(source=original.tasks.source, task_id=task_id))
        for task_id in task_range.ids()
    )


def jobs_from_info(info: JobInfo) -> JobList:
    """Running jobs of every queue, in queue order, then pending jobs."""
    jobs = JobList()
    for queue in info.queues:
        jobs.extend(queue.jobs)
    jobs.extend(info.pending_jobs)
    return jobs


def get_jobs(fetch: Callable[[], JobInfo] | None = None) -> JobList:
    """Retrieve the current job listing as a single :class:`JobList`.

    Args:
        fetch: Callable returning a parsed :class:`JobInfo`. Defaults to
            running qstat via :func:`gridstat.schedulers.sge.qstat.fetch_job_info`.

    Raises:
        UpstreamError: If qstat could not be run.
        ParseError: If its output could not be decoded.
    """
    if fetch is None:
        from gridstat.schedulers.sge.qstat import fetch_job_info

        fetch = fetch_job_info
    return jobs_from_info(fetch())


def get_jobs_with_filter(
    predicate: JobPredicate, fetch: Callable[[], JobInfo] | None = None
) -> JobList:
    """Retrieve the job listing and filter it in one step."""
    return get_jobs(fetch).filter(predicate)

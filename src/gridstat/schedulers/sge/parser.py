"""SGE ``qstat -xml`` output parsing."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Callable

from gridstat.core.exceptions import ParseError
from gridstat.core.job import Job, JobList
from gridstat.core.numbers import parse_float, parse_int
from gridstat.core.resources import Resource, ResourceList
from gridstat.core.task import Task


@dataclass
class Queue:
    """A queue instance (``Queue-List`` element) and the jobs running in it."""

    name: str = ""
    qtype: str = ""
    slots_used: int = 0
    slots_total: int = 0
    load_avg: float | None = None
    state: str = ""
    resources: ResourceList = field(default_factory=ResourceList)
    jobs: JobList = field(default_factory=JobList)


@dataclass
class JobInfo:
    """Top-level qstat document: queues with running jobs, then pending jobs."""

    queues: list[Queue] = field(default_factory=list)
    pending_jobs: JobList = field(default_factory=JobList)

    def get_queue(self, name: str) -> Queue | None:
        return next((q for q in self.queues if q.name == name), None)


def parse_qstat_xml(xml_output: str | bytes) -> JobInfo:
    """Parse ``qstat -xml`` (optionally ``-f -F``) output.

    Queue listings come from ``queue_info/Queue-List``. Without ``-f``,
    qstat puts running ``job_list`` entries directly under ``queue_info``;
    those are collected into a single unnamed queue. Pending jobs come from
    the nested ``job_info`` element.

    Raises:
        ParseError: If the document or any job/queue field is malformed.
    """
    try:
        root = ET.fromstring(xml_output)
    except ET.ParseError as exc:
        raise ParseError(f"Invalid qstat XML: {exc}") from exc
    _strip_namespaces(root)

    info = JobInfo()

    queue_info = root.find("queue_info")
    if queue_info is not None:
        for queue_elem in queue_info.findall("Queue-List"):
            info.queues.append(_parse_queue_element(queue_elem))

        loose_jobs = queue_info.findall("job_list")
        if loose_jobs:
            info.queues.append(Queue(jobs=JobList(_parse_job_element(j) for j in loose_jobs)))

    pending = root.find("job_info")
    if pending is not None:
        info.pending_jobs = JobList(_parse_job_element(j) for j in pending.findall("job_list"))

    return info


def _strip_namespaces(root: ET.Element) -> None:
    for elem in root.iter():
        if isinstance(elem.tag, str) and "}" in elem.tag:
            elem.tag = elem.tag.split("}", 1)[1]


def _parse_queue_element(elem: ET.Element) -> Queue:
    queue = Queue(
        name=_text(elem, "name"),
        qtype=_text(elem, "qtype"),
        slots_used=_int(elem, "slots_used"),
        slots_total=_int(elem, "slots_total"),
        state=_text(elem, "state"),
    )
    if elem.find("load_avg") is not None:
        queue.load_avg = _float(elem, "load_avg")

    for res in elem.findall("resource"):
        queue.resources.resources.append(
            Resource(
                name=res.get("name", ""),
                type=res.get("type", ""),
                value=(res.text or "").strip(),
            )
        )

    queue.jobs = JobList(_parse_job_element(j) for j in elem.findall("job_list"))
    return queue


def _parse_job_element(elem: ET.Element) -> Job:
    """Parse a single job_list element."""
    tasks_elem = elem.find("tasks")
    tasks = Task.decode(tasks_elem.text or "") if tasks_elem is not None else Task()

    queue_elem = elem.find("queue_name")
    queue_name = queue_elem.text if queue_elem is not None and queue_elem.text else None

    return Job(
        job_number=_int(elem, "JB_job_number"),
        state=_text(elem, "state"),
        state_attribute=elem.get("state", ""),
        priority=_float(elem, "JAT_prio"),
        name=_text(elem, "JB_name"),
        owner=_text(elem, "JB_owner"),
        start_time=_text(elem, "JAT_start_time"),
        submitted_time=_text(elem, "JB_submission_time"),
        slots=_int(elem, "slots"),
        tasks=tasks,
        queue_name=queue_name,
    )


def _text(elem: ET.Element, tag: str) -> str:
    return (elem.findtext(tag) or "").strip()


def _int(elem: ET.Element, tag: str) -> int:
    return _convert(elem, tag, parse_int, 0)


def _float(elem: ET.Element, tag: str) -> float:
    return _convert(elem, tag, parse_float, 0.0)


def _convert(
    elem: ET.Element, tag: str, kind: Callable[[str], Any], default: Any
) -> Any:
    text = _text(elem, tag)
    if not text:
        return default
    try:
        return kind(text)
    except ParseError as exc:
        raise ParseError(f"Invalid {tag} value: {text!r}") from exc

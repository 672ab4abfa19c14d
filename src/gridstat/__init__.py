"""gridstat: typed data model for Grid Engine qstat reports."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gridstat")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"

from gridstat.core.config import GridStatConfig, get_config, load_config, reload_config
from gridstat.core.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    DomainError,
    GridStatError,
    NotFoundError,
    ParseError,
    ResourceNotFoundError,
    UnsupportedUnitError,
    UpstreamError,
)
from gridstat.core.job import (
    Job,
    JobList,
    does_job_contain_task_range,
    extrapolate_tasks_to_jobs,
    filter_jobs,
    get_jobs,
    get_jobs_with_filter,
)
from gridstat.core.resources import Resource, ResourceList
from gridstat.core.storage import StorageValue, parse_storage_value
from gridstat.core.task import Task, TaskRange
from gridstat.schedulers.sge.parser import JobInfo, Queue, parse_qstat_xml

__all__ = [
    # Version
    "__version__",
    # Jobs
    "Job",
    "JobList",
    "Task",
    "TaskRange",
    "get_jobs",
    "get_jobs_with_filter",
    "filter_jobs",
    "does_job_contain_task_range",
    "extrapolate_tasks_to_jobs",
    # Resources
    "Resource",
    "ResourceList",
    "StorageValue",
    "parse_storage_value",
    # Document
    "JobInfo",
    "Queue",
    "parse_qstat_xml",
    # Config
    "load_config",
    "get_config",
    "reload_config",
    "GridStatConfig",
    # Exceptions
    "GridStatError",
    "ParseError",
    "UnsupportedUnitError",
    "NotFoundError",
    "ResourceNotFoundError",
    "DomainError",
    "UpstreamError",
    "ConfigError",
    "ConfigNotFoundError",
]

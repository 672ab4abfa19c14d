"""Core models for gridstat."""

from .exceptions import (
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
from .job import Job, JobList
from .resources import Resource, ResourceList
from .storage import StorageValue
from .task import Task, TaskRange

__all__ = [
    # Exceptions
    "ConfigError",
    "ConfigNotFoundError",
    "DomainError",
    "GridStatError",
    "NotFoundError",
    "ParseError",
    "ResourceNotFoundError",
    "UnsupportedUnitError",
    "UpstreamError",
    # Types
    "Job",
    "JobList",
    "Resource",
    "ResourceList",
    "StorageValue",
    "Task",
    "TaskRange",
]

"""Custom exceptions for gridstat."""


class GridStatError(Exception):
    """Base exception for gridstat."""


class ParseError(GridStatError, ValueError):
    """Malformed numeric or text content in scheduler output."""


class UnsupportedUnitError(ParseError):
    """Storage value carries a unit suffix that cannot be scaled."""


class NotFoundError(GridStatError, LookupError):
    """Requested item is not present."""


class ResourceNotFoundError(NotFoundError):
    """Resource key not found in a resource list."""

    def __init__(self, key: str):
        super().__init__(f"Could not locate the requested resource: {key}")
        self.key = key


class DomainError(GridStatError):
    """Operation invoked on data that does not satisfy its precondition."""


class UpstreamError(GridStatError):
    """Failure reported by the scheduler's reporting tool.

    Raised when qstat cannot be executed or exits with an error. The
    original exception is chained as ``__cause__``.
    """


class ConfigError(GridStatError):
    """Error in configuration."""


class ConfigNotFoundError(ConfigError):
    """Configuration file not found."""

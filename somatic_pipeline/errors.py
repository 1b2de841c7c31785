"""Exceptions raised by the somatic staging pipeline."""

from collections.abc import Sequence
from pathlib import Path


class PipelineError(Exception):
    """Base class for all pipeline errors."""
    pass


class ConfigurationError(PipelineError):
    """Raised before any processing when a directory, input path or sizing is unusable."""
    pass


class MalformedRecord(PipelineError):
    """A record lacks one or more of the fields that define its identity."""

    def __init__(self, missing: Sequence[str], line_number: int | None = None):
        self.missing = tuple(missing)
        self.line_number = line_number
        location = f" at line {line_number}" if line_number is not None else ""
        super().__init__(f"Record{location} is missing identity fields: {', '.join(self.missing)}")


class IOFailure(PipelineError):
    """Reading the record source or writing the staging file failed."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(f"{message} ({path})" if path else message)


class RunCancelled(PipelineError):
    """A run observed a cancellation request before finishing its scan."""
    pass

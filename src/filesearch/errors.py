"""
Exception hierarchy for filesearch.

Fatal errors (a missing target, a failing root traversal) stop the run with a
non-zero status. Output errors are recoverable: the scan already completed,
only persisting the report failed.
"""

from typing import Optional


class FileSearchError(Exception):
    """Base class for all filesearch errors."""
    pass


class TargetNotFoundError(FileSearchError):
    """Raised when the target directory does not exist or is not a directory."""

    def __init__(self, path: str, reason: str = "does not exist"):
        self.path = path
        self.reason = reason
        super().__init__(f"Directory '{path}' {reason}.")


class TraversalError(FileSearchError):
    """Raised when the root traversal call itself fails."""

    def __init__(self, path: str, cause: Optional[OSError] = None):
        self.path = path
        self.cause = cause
        message = f"Error scanning '{path}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class OutputError(FileSearchError):
    """Raised when a report file cannot be created or written."""

    def __init__(self, path: str, cause: Optional[OSError] = None):
        self.path = path
        self.cause = cause
        message = f"Error creating file '{path}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)

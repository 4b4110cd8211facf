"""Exceptions raised while reading the process information interface."""

from typing import Optional


class ProcfsError(Exception):
    """Base exception for proctab errors."""
    pass


class InterfaceUnavailable(ProcfsError):
    """The process information pseudo-filesystem is not mounted."""

    def __init__(self, root: str, reason: str = "not mounted"):
        self.root = root
        self.reason = reason
        super().__init__(f"proc filesystem {reason} on {root}")


class RowUnavailable(ProcfsError):
    """A process vanished or its status file could not be read."""

    def __init__(self, pid: int, reason: str):
        self.pid = pid
        self.reason = reason
        super().__init__(f"pid {pid}: {reason}")


class FieldNotFound(ProcfsError):
    """An expected field is missing from a file that should be well-formed."""

    def __init__(self, field: str, source: Optional[str] = None):
        self.field = field
        self.source = source
        message = f"{field} not found"
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class OptionalSourceMissing(ProcfsError):
    """An optional data source (such as I/O accounting) is not available."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"optional source missing: {path}")

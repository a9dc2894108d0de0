"""
Error types for Media Inspector.

Filesystem failures are reported with the builtin OSError; everything
the inspector raises on its own derives from InspectorError.
"""
from typing import Optional


class InspectorError(Exception):
    """Base error type."""


class ProbeError(InspectorError):
    """ffprobe failed to run, exited non-zero, or produced unusable output."""

    def __init__(self, message: str, stderr: Optional[str] = None, returncode: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.stderr = stderr
        self.returncode = returncode

    def __str__(self) -> str:
        if self.stderr:
            return f"{self.message}: {self.stderr.strip()}"
        return self.message


class CacheCorruption(InspectorError):
    """Persisted cache could not be decoded."""


class FilterSyntaxError(InspectorError, ValueError):
    """A --filter expression could not be understood."""

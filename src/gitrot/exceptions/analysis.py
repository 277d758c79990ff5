"""Analysis-related exceptions: file access, blame retrieval, blame parsing."""

from pathlib import Path
from typing import Optional, Sequence

from .base import GitrotError


class AnalysisError(GitrotError):
    """Base class for per-file analysis errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be opened."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Could not open file {filepath}: {reason}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class BlameUnavailableError(AnalysisError):
    """Raised when git produced no authorship data for a file."""

    def __init__(self, filepath: Path, reason: str = ""):
        details = {"filepath": str(filepath)}
        if reason:
            details["reason"] = reason
        super().__init__(
            "Did not find any git blame information. "
            "Has this file been committed to your git repository?",
            details=details,
        )
        self.filepath = filepath
        self.reason = reason


class BlameReadError(AnalysisError):
    """Raised when the blame stream fails mid-read.

    Records read before the failure are discarded.
    """

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            "Error reading git blame information",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class BlameParseError(AnalysisError):
    """Raised when a blame record does not have the expected shape.

    ``records`` holds every record parsed successfully before the bad one,
    so callers can still analyze the leading part of the file.
    """

    def __init__(self, reason: str, line_number: int, records: Optional[Sequence] = None):
        super().__init__(
            f"Malformed git blame record: {reason}",
            details={"stream_line": str(line_number)},
        )
        self.reason = reason
        self.line_number = line_number
        self.records = list(records or [])

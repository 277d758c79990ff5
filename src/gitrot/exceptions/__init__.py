"""Exception hierarchy for gitrot."""

from .analysis import (
    AnalysisError,
    BlameParseError,
    BlameReadError,
    BlameUnavailableError,
    FileAccessError,
)
from .base import GitrotError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "GitrotError",
    "AnalysisError",
    "FileAccessError",
    "BlameUnavailableError",
    "BlameReadError",
    "BlameParseError",
    "ConfigurationError",
    "InvalidConfigError",
]

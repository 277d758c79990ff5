"""Blame ingestion — git subprocess runner and porcelain stream reader."""

from .models import AuthorshipRecord
from .reader import BlameReader, read_blame
from .runner import GitBlame

__all__ = [
    "AuthorshipRecord",
    "BlameReader",
    "GitBlame",
    "read_blame",
]

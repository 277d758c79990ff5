"""Data models for git blame authorship records."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuthorshipRecord:
    """Who last touched one physical source line, and when.

    One record is produced per line of ``git blame --line-porcelain``
    output. ``sequence_number`` is the 1-based ingestion position within
    the file the record was read for.
    """

    commit_id: str
    orig_line: int
    final_line: int
    author: str
    author_email: str
    author_time: int  # unix seconds
    author_tz: str
    committer: str
    committer_email: str
    committer_time: int  # unix seconds
    committer_tz: str
    summary: str
    filename: str
    content: str
    sequence_number: int
    group_size: Optional[int] = None
    previous: Optional[str] = None  # "<revision> <filename>", absent on boundary commits
    boundary: bool = False

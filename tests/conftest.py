"""Shared test fixtures for gitrot tests."""

from typing import Optional, Union

import pytest

from gitrot.blame.models import AuthorshipRecord

DAY = 86400
BASE_TIME = 1_400_000_000  # 2014-05-13


def make_record(
    content: str,
    sequence_number: int = 1,
    author_time: int = BASE_TIME,
    commit_id: str = "a" * 40,
) -> AuthorshipRecord:
    return AuthorshipRecord(
        commit_id=commit_id,
        orig_line=sequence_number,
        final_line=sequence_number,
        author="Alice",
        author_email="alice@example.com",
        author_time=author_time,
        author_tz="+0000",
        committer="Alice",
        committer_email="alice@example.com",
        committer_time=author_time,
        committer_tz="+0000",
        summary="initial",
        filename="main.c",
        content=content,
        sequence_number=sequence_number,
    )


def make_records(lines: list[Union[str, tuple[str, int]]]) -> list[AuthorshipRecord]:
    """Create records from content strings or (content, age_in_days) tuples."""
    records = []
    for i, item in enumerate(lines, start=1):
        if isinstance(item, tuple):
            content, days = item
        else:
            content, days = item, 0
        records.append(make_record(content, i, BASE_TIME + days * DAY))
    return records


def porcelain_entry(
    content: str,
    final_line: int,
    author_time: int = BASE_TIME,
    commit_id: str = "b" * 40,
    previous: Optional[str] = "c" * 40 + " main.c",
    boundary: bool = False,
    filename: str = "main.c",
) -> str:
    """One record of `git blame --line-porcelain` output."""
    lines = [
        f"{commit_id} {final_line} {final_line} 1",
        "author Alice",
        "author-mail <alice@example.com>",
        f"author-time {author_time}",
        "author-tz +0100",
        "committer Bob",
        "committer-mail <bob@example.com>",
        f"committer-time {author_time + 60}",
        "committer-tz +0200",
        "summary Add parser",
    ]
    if boundary:
        lines.append("boundary")
    if previous is not None:
        lines.append(f"previous {previous}")
    lines.append(f"filename {filename}")
    lines.append(f"\t{content}")
    return "".join(line + "\n" for line in lines)


@pytest.fixture
def records():
    return make_records


@pytest.fixture
def porcelain():
    """Build a porcelain stream (list of lines) from content strings."""

    def _build(contents: list[str], **kwargs) -> list[str]:
        text = "".join(porcelain_entry(c, i, **kwargs) for i, c in enumerate(contents, start=1))
        return text.splitlines(keepends=True)

    return _build

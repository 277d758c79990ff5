"""Block and file models for segmented source."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from ..blame.models import AuthorshipRecord


class BlockType(Enum):
    """Classification shared by every line of a block."""

    BLANK = "blank"
    COMMENT = "comment"
    CODE = "code"

    @property
    def display_name(self) -> str:
        return f"{self.value.capitalize()} Block"


@dataclass(frozen=True)
class Block:
    """A maximal run of consecutive lines with one classification.

    ``id`` is a diagnostic identifier, unique and increasing within the file
    the block was segmented from.
    """

    type: BlockType
    id: int
    lines: tuple[AuthorshipRecord, ...]

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError("a block needs at least one line")

    @property
    def name(self) -> str:
        return self.type.display_name

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def first_line_number(self) -> int:
        return self.lines[0].sequence_number

    @property
    def last_line_number(self) -> int:
        return self.lines[-1].sequence_number

    @property
    def freshness(self) -> int:
        """Most recent author time (unix seconds) among the block's lines."""
        return max(line.author_time for line in self.lines)


@dataclass
class SourceFile:
    """One analyzed file: its blocks in file order plus aggregate counts.

    Counts are filled in by the segmenter as it produces each block.
    """

    path: str
    blocks: list[Block] = field(default_factory=list)
    line_count: int = 0
    blank_blocks: int = 0
    code_blocks: int = 0
    comment_blocks: int = 0

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    @property
    def records(self) -> Iterator[AuthorshipRecord]:
        """All lines in file order, rebuilt from the blocks."""
        for block in self.blocks:
            yield from block.lines

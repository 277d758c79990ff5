"""Pair comment blocks with the code that follows them and flag stale pairs.

A comment block is paired with the nearest code block after it. When the
most recent edits of the two are at least ``range_days`` apart, the pair is
reported as stale. A pair inside the range does not stop the search: it
continues with the next comment block after that code block.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .blocks.models import Block, BlockType
from .config import SECONDS_PER_DAY


def age_gap_days(first: Block, second: Block) -> int:
    """Whole days between the freshness of two blocks, in either order."""
    return abs(second.freshness - first.freshness) // SECONDS_PER_DAY


@dataclass(frozen=True)
class StalePair:
    """A comment block and the code block it sits in front of."""

    comment: Block
    code: Block

    def __post_init__(self) -> None:
        if self.comment.type is not BlockType.COMMENT:
            raise ValueError(f"expected a comment block, got {self.comment.name}")
        if self.code.type is not BlockType.CODE:
            raise ValueError(f"expected a code block, got {self.code.name}")
        if self.comment.first_line_number >= self.code.first_line_number:
            raise ValueError("comment block must come before the code block")

    @property
    def age_gap_days(self) -> int:
        return age_gap_days(self.comment, self.code)

    @property
    def comment_line(self) -> int:
        return self.comment.first_line_number

    @property
    def code_line(self) -> int:
        return self.code.first_line_number


def next_stale_pair(
    blocks: Sequence[Block], start: int, range_days: int
) -> Optional[tuple[StalePair, int]]:
    """Find the next stale pair at or after ``blocks[start]``.

    Returns the pair and the index of its code block, or ``None`` once no
    comment block followed by a code block is left.
    """
    pos = start
    end = len(blocks)
    while pos < end:
        while pos < end and blocks[pos].type is not BlockType.COMMENT:
            pos += 1
        if pos == end:
            return None
        comment_index = pos

        while pos < end and blocks[pos].type is not BlockType.CODE:
            pos += 1
        if pos == end:
            return None

        comment, code = blocks[comment_index], blocks[pos]
        if age_gap_days(comment, code) >= range_days:
            return StalePair(comment=comment, code=code), pos
        pos += 1
    return None


def find_stale_pairs(blocks: Sequence[Block], range_days: int) -> list[StalePair]:
    """Every stale pair in ``blocks``, in file order."""
    pairs: list[StalePair] = []
    pos = 0
    while True:
        found = next_stale_pair(blocks, pos, range_days)
        if found is None:
            break
        pair, code_index = found
        pairs.append(pair)
        pos = code_index + 1
    return pairs

"""Group an ordered stream of blamed lines into blank, comment and code blocks.

A cursor walks the records once. At each position one rule picks the block
type and how many lines it absorbs:

1. blank line: a BLANK block of consecutive blank lines.
2. comment-only line: a COMMENT block of consecutive comment-only lines.
   Line opening a block comment it does not close: a COMMENT block running
   up to and including the line that closes it, or up to the next blank
   line.
3. anything else: a CODE block of the first line plus following lines that
   are not blank and open no comment.

Every rule takes at least one line, so the cursor always advances.
"""

from pathlib import Path
from typing import Iterator, Sequence, Union

from ..blame.models import AuthorshipRecord
from ..logging_config import get_logger
from .classifier import (
    ends_inside_comment,
    find_comment_open,
    has_unterminated_comment,
    is_blank,
    is_comment_only,
)
from .models import Block, BlockType, SourceFile

logger = get_logger(__name__)


def iter_blocks(
    records: Sequence[AuthorshipRecord], first_block_id: int = 1
) -> Iterator[Block]:
    """Yield blocks covering ``records`` exactly, in order."""
    pos = 0
    block_id = first_block_id
    while pos < len(records):
        block_type, end = _take_block(records, pos)
        yield Block(type=block_type, id=block_id, lines=tuple(records[pos:end]))
        block_id += 1
        pos = end


def segment_records(
    records: Sequence[AuthorshipRecord], first_block_id: int = 1
) -> list[Block]:
    return list(iter_blocks(records, first_block_id))


def build_source_file(
    path: Union[str, Path], records: Sequence[AuthorshipRecord]
) -> SourceFile:
    """Segment one file's records and tally its block counts."""
    source = SourceFile(path=str(path))
    for block in iter_blocks(records):
        source.blocks.append(block)
        source.line_count += block.line_count
        if block.type is BlockType.BLANK:
            source.blank_blocks += 1
        elif block.type is BlockType.COMMENT:
            source.comment_blocks += 1
        else:
            source.code_blocks += 1

    logger.debug(
        "%s: %d lines in %d blocks (%d blank, %d comment, %d code)",
        source.path,
        source.line_count,
        source.block_count,
        source.blank_blocks,
        source.comment_blocks,
        source.code_blocks,
    )
    return source


def _take_block(records: Sequence[AuthorshipRecord], pos: int) -> tuple[BlockType, int]:
    """Classify the block starting at ``pos``; return its type and end index."""
    content = records[pos].content
    if is_blank(content):
        return BlockType.BLANK, _take_while(records, pos, is_blank)
    if is_comment_only(content):
        return BlockType.COMMENT, _take_while(records, pos, is_comment_only)
    if has_unterminated_comment(content):
        return BlockType.COMMENT, _take_open_comment(records, pos)
    return BlockType.CODE, _take_code(records, pos)


def _take_while(records: Sequence[AuthorshipRecord], pos: int, predicate) -> int:
    end = pos
    while end < len(records) and predicate(records[end].content):
        end += 1
    return end


def _take_open_comment(records: Sequence[AuthorshipRecord], pos: int) -> int:
    # A blank line ends the block even without a closing */
    end = pos + 1
    while end < len(records):
        content = records[end].content
        if is_blank(content):
            break
        end += 1
        if not ends_inside_comment(content, inside=True):
            break
    return end


def _take_code(records: Sequence[AuthorshipRecord], pos: int) -> int:
    end = pos + 1
    while end < len(records):
        content = records[end].content
        if is_blank(content) or find_comment_open(content) != -1:
            break
        end += 1
    return end

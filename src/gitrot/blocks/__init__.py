"""Line classification and block segmentation."""

from .classifier import (
    ends_inside_comment,
    find_comment_close,
    find_comment_open,
    has_unterminated_comment,
    is_blank,
    is_comment_only,
)
from .models import Block, BlockType, SourceFile
from .segmenter import build_source_file, iter_blocks, segment_records

__all__ = [
    "Block",
    "BlockType",
    "SourceFile",
    "build_source_file",
    "ends_inside_comment",
    "find_comment_close",
    "find_comment_open",
    "has_unterminated_comment",
    "is_blank",
    "is_comment_only",
    "iter_blocks",
    "segment_records",
]

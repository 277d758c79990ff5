"""
gitrot - stale comment locator

Uses git blame timestamps to find comment blocks that were last edited long
before (or after) the code directly below them.
"""

__version__ = "0.1.0"

from .blocks.models import Block, BlockType, SourceFile
from .config import GitrotConfig, load_config
from .core import FileReport, StaleCommentAnalyzer
from .matcher import StalePair, find_stale_pairs, next_stale_pair

__all__ = [
    "StaleCommentAnalyzer",  # Main entry point
    "FileReport",
    "GitrotConfig",
    "load_config",
    "Block",
    "BlockType",
    "SourceFile",
    "StalePair",
    "find_stale_pairs",
    "next_stale_pair",
]

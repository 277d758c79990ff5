"""Per-file analysis: blame, segment, match.

Each file is analyzed on its own. A file that cannot be opened or blamed
is reported and skipped; the rest of the run carries on.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from .blame.models import AuthorshipRecord
from .blame.runner import GitBlame
from .blocks.models import SourceFile
from .blocks.segmenter import build_source_file
from .config import GitrotConfig
from .exceptions import AnalysisError, BlameParseError, FileAccessError
from .logging_config import get_logger
from .matcher import StalePair, find_stale_pairs

logger = get_logger(__name__)

BlameSource = Callable[[Path], list[AuthorshipRecord]]


@dataclass
class FileReport:
    """Outcome of analyzing one file.

    ``source`` is None when the file was skipped, in which case ``error``
    says why. ``truncated`` marks a file whose blame stream held a
    malformed record; only the lines before it were analyzed.
    """

    path: str
    source: Optional[SourceFile] = None
    stale_pairs: list[StalePair] = field(default_factory=list)
    error: Optional[AnalysisError] = None
    truncated: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class StaleCommentAnalyzer:
    """Find stale comment/code pairs in a set of files."""

    def __init__(self, config: GitrotConfig, blame: Optional[BlameSource] = None):
        self.config = config
        self.blame = blame or GitBlame(config.git_executable, config.timeout_seconds)

    def analyze(self, paths: Iterable[Union[str, Path]]) -> list[FileReport]:
        """Analyze every path. Reports come back in input order."""
        paths = [Path(p) for p in paths]
        if self.config.workers <= 1 or len(paths) < 2:
            return [self.analyze_file(p) for p in paths]

        logger.debug("Analyzing %d files with %d workers", len(paths), self.config.workers)
        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            return list(executor.map(self.analyze_file, paths))

    def analyze_file(self, path: Union[str, Path]) -> FileReport:
        path = Path(path)
        truncated = False
        try:
            _check_readable(path)
            records = self.blame(path)
        except BlameParseError as e:
            logger.info("%s: %s; analyzing the %d lines before it", path, e, len(e.records))
            records = e.records
            truncated = True
        except AnalysisError as e:
            logger.info("Skipping %s: %s", path, e)
            return FileReport(path=str(path), error=e)

        source = build_source_file(path, records)
        pairs: list[StalePair] = []
        if self.config.staleness_enabled:
            pairs = find_stale_pairs(source.blocks, self.config.range_days)
            logger.debug(
                "%s: %d stale pairs at %d days", path, len(pairs), self.config.range_days
            )

        return FileReport(
            path=str(path), source=source, stale_pairs=pairs, truncated=truncated
        )


def _check_readable(path: Path) -> None:
    try:
        with open(path, "rb"):
            pass
    except OSError as e:
        raise FileAccessError(path, e.strerror or str(e))

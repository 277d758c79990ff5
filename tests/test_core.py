"""Tests for per-file analysis and error isolation."""

from pathlib import Path

import pytest

from gitrot.config import GitrotConfig
from gitrot.core import StaleCommentAnalyzer
from gitrot.exceptions import (
    BlameParseError,
    BlameReadError,
    BlameUnavailableError,
    FileAccessError,
)

STALE_FILE = [
    ("// Returns the sum.", 0),
    ("int add(int a, int b) {", 0),
    ("    return a - b;", 90),
    ("}", 0),
]


class FakeBlame:
    """Blame source returning canned records or raising canned errors per file name."""

    def __init__(self, outcomes):
        self.outcomes = outcomes
        self.calls: list[Path] = []

    def __call__(self, path):
        self.calls.append(path)
        outcome = self.outcomes[path.name]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def source_files(tmp_path):
    def _make(*names: str) -> list[Path]:
        paths = []
        for name in names:
            path = tmp_path / name
            path.write_text("placeholder\n")
            paths.append(path)
        return paths

    return _make


class TestAnalyzeFile:
    def test_stale_pair_found(self, records, source_files):
        (path,) = source_files("add.c")
        analyzer = StaleCommentAnalyzer(
            GitrotConfig(range_days=30), blame=FakeBlame({"add.c": records(STALE_FILE)})
        )

        report = analyzer.analyze_file(path)

        assert report.ok
        assert report.path == str(path)
        assert report.source.line_count == 4
        assert report.source.comment_blocks == 1
        assert report.source.code_blocks == 1
        assert [p.age_gap_days for p in report.stale_pairs] == [90]

    def test_within_range(self, records, source_files):
        (path,) = source_files("add.c")
        analyzer = StaleCommentAnalyzer(
            GitrotConfig(range_days=365), blame=FakeBlame({"add.c": records(STALE_FILE)})
        )
        assert analyzer.analyze_file(path).stale_pairs == []

    def test_no_range_skips_matching(self, records, source_files):
        (path,) = source_files("add.c")
        analyzer = StaleCommentAnalyzer(
            GitrotConfig(), blame=FakeBlame({"add.c": records(STALE_FILE)})
        )
        report = analyzer.analyze_file(path)
        assert report.ok
        assert report.stale_pairs == []
        assert report.source.block_count == 2

    def test_missing_file(self, tmp_path):
        blame = FakeBlame({})
        analyzer = StaleCommentAnalyzer(GitrotConfig(range_days=1), blame=blame)

        report = analyzer.analyze_file(tmp_path / "gone.c")

        assert not report.ok
        assert isinstance(report.error, FileAccessError)
        assert report.error.reason == "No such file or directory"
        assert report.source is None
        assert blame.calls == []

    def test_directory_is_not_openable(self, tmp_path):
        analyzer = StaleCommentAnalyzer(GitrotConfig(range_days=1), blame=FakeBlame({}))
        report = analyzer.analyze_file(tmp_path)
        assert isinstance(report.error, FileAccessError)

    def test_not_committed(self, source_files):
        (path,) = source_files("new.c")
        analyzer = StaleCommentAnalyzer(
            GitrotConfig(range_days=1),
            blame=FakeBlame({"new.c": BlameUnavailableError(path)}),
        )
        report = analyzer.analyze_file(path)
        assert isinstance(report.error, BlameUnavailableError)
        assert "committed" in report.error.message

    def test_read_error_discards_file(self, source_files):
        (path,) = source_files("broken.c")
        analyzer = StaleCommentAnalyzer(
            GitrotConfig(range_days=1),
            blame=FakeBlame({"broken.c": BlameReadError(path, "pipe closed")}),
        )
        report = analyzer.analyze_file(path)
        assert isinstance(report.error, BlameReadError)
        assert report.source is None

    def test_parse_error_analyzes_leading_records(self, records, source_files):
        (path,) = source_files("partial.c")
        error = BlameParseError("unexpected header", 27, records(STALE_FILE[:3]))
        analyzer = StaleCommentAnalyzer(
            GitrotConfig(range_days=30), blame=FakeBlame({"partial.c": error})
        )

        report = analyzer.analyze_file(path)

        assert report.ok
        assert report.truncated
        assert report.source.line_count == 3
        assert len(report.stale_pairs) == 1


class TestAnalyze:
    def test_failures_isolated(self, records, source_files):
        good, bad, other = source_files("good.c", "bad.c", "other.c")
        analyzer = StaleCommentAnalyzer(
            GitrotConfig(range_days=30),
            blame=FakeBlame(
                {
                    "good.c": records(STALE_FILE),
                    "bad.c": BlameUnavailableError(bad),
                    "other.c": records(["int x;"]),
                }
            ),
        )

        reports = analyzer.analyze([good, bad, other])

        assert [r.path for r in reports] == [str(good), str(bad), str(other)]
        assert [r.ok for r in reports] == [True, False, True]
        assert len(reports[0].stale_pairs) == 1

    def test_parallel_keeps_input_order(self, records, source_files):
        paths = source_files(*(f"f{i}.c" for i in range(6)))
        outcomes = {p.name: records(STALE_FILE) for p in paths}
        analyzer = StaleCommentAnalyzer(
            GitrotConfig(range_days=30, workers=3), blame=FakeBlame(outcomes)
        )

        reports = analyzer.analyze(paths)

        assert [r.path for r in reports] == [str(p) for p in paths]
        assert all(len(r.stale_pairs) == 1 for r in reports)

    def test_counters_are_per_file(self, records, source_files):
        first, second = source_files("a.c", "b.c")
        analyzer = StaleCommentAnalyzer(
            GitrotConfig(range_days=30),
            blame=FakeBlame({"a.c": records(STALE_FILE), "b.c": records(STALE_FILE)}),
        )

        a, b = analyzer.analyze([first, second])

        assert [blk.id for blk in a.source.blocks] == [blk.id for blk in b.source.blocks]
        assert a.stale_pairs[0].comment_line == b.stale_pairs[0].comment_line == 1

    def test_default_blame_uses_config(self):
        analyzer = StaleCommentAnalyzer(GitrotConfig(git_executable="mygit", timeout_seconds=5))
        assert analyzer.blame.git_executable == "mygit"
        assert analyzer.blame.timeout_seconds == 5

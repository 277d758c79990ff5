"""Shared CLI helpers."""

from rich.console import Console

console = Console()
err_console = Console(stderr=True)


class ExitCode:
    """Semantic exit codes for CI observability.

    Ranges:
      0: Success
      1-9: Finding-based failures
      80-89: User errors (bad input)
    """

    SUCCESS = 0
    STALE_COMMENTS_FOUND = 1
    BAD_USAGE = 80
    CONFIG_ERROR = 81
    ALL_FILES_FAILED = 83

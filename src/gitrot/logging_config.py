"""
Logging configuration for gitrot.

Log records go to stderr through a rich handler so they never mix with the
report written to stdout.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(verbosity: str = "normal") -> logging.Logger:
    """
    Route gitrot's log records to a rich handler on stderr.

    Args:
        verbosity: ``quiet`` (errors only), ``normal`` (warnings and up) or
            ``verbose`` (debug, with timestamps and source locations)

    Returns:
        The root gitrot logger
    """
    level = LOG_LEVELS[verbosity]
    detailed = verbosity == "verbose"

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=detailed,
        # Messages carry source lines and paths, never rich markup
        markup=False,
        show_time=detailed,
        show_path=detailed,
    )
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=[handler], force=True
    )

    logger = logging.getLogger("gitrot")
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``gitrot`` namespace; ``None`` gives the root gitrot logger."""
    if name is None:
        return logging.getLogger("gitrot")
    if not name.startswith("gitrot"):
        name = f"gitrot.{name}"
    return logging.getLogger(name)

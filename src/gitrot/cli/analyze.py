"""Main command — blame each file and report stale comment blocks."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from .. import __version__
from ..config import load_config
from ..core import StaleCommentAnalyzer
from ..exceptions import GitrotError
from ..logging_config import setup_logging
from . import app
from ._common import ExitCode, console, err_console
from ._report import (
    output_json,
    render_block_dump,
    render_errors,
    render_stale_pairs,
    render_stats,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"gitrot {__version__}")
        raise typer.Exit(ExitCode.SUCCESS)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def main(
    files: List[Path] = typer.Argument(
        ...,
        help="Paths to files committed to a git repository",
        show_default=False,
    ),
    range_days: Optional[int] = typer.Option(
        None,
        "-r",
        "--range",
        min=0,
        help="Days between comment and code modification times at which the comment is considered stale",
    ),
    verbose: bool = typer.Option(
        False,
        "-v",
        "--verbose",
        help="Dump every file's block structure",
    ),
    stats: bool = typer.Option(
        False,
        "-s",
        "--stats",
        help="Print per-file line and block counts",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Explicit TOML config file",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-j",
        "--workers",
        min=1,
        help="Number of files to analyze in parallel",
    ),
    fail_on_stale: bool = typer.Option(
        False,
        "--fail-on-stale",
        help="Exit with status 1 when any stale pair is found",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "-q",
        "--quiet",
        help="Only log errors",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """
    Find comment blocks whose code was changed long after the comment was.

    Each file is blamed, split into blank, comment and code blocks, and
    every comment block is paired with the code block after it.

    [bold cyan]Examples:[/bold cyan]

      gitrot -r 30 src/main.c

      gitrot -r 90 -s src/*.c

      gitrot -v src/parser.c
    """
    try:
        settings = load_config(
            config_file=config,
            range_days=range_days,
            workers=workers,
            verbose=debug,
            quiet=quiet,
        )
    except GitrotError as e:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(ExitCode.CONFIG_ERROR)

    setup_logging(settings.verbosity)

    if not settings.staleness_enabled and not (verbose or stats or json_output):
        err_console.print(
            "[red]Error:[/red] no staleness range given. "
            "Pass [bold]-r DAYS[/bold] or set range_days in gitrot.toml."
        )
        raise typer.Exit(ExitCode.BAD_USAGE)

    reports = StaleCommentAnalyzer(settings).analyze(files)
    render_errors(err_console, reports)

    if json_output:
        output_json(reports, settings.range_days)
    else:
        if settings.staleness_enabled:
            render_stale_pairs(console, reports, settings.range_days)
        if verbose:
            for report in reports:
                if report.source is not None:
                    render_block_dump(console, report.source)
        if stats:
            render_stats(console, reports)

    if reports and not any(r.ok for r in reports):
        raise typer.Exit(ExitCode.ALL_FILES_FAILED)
    if fail_on_stale and any(r.stale_pairs for r in reports):
        raise typer.Exit(ExitCode.STALE_COMMENTS_FOUND)

"""CLI entry point."""

import typer

app = typer.Typer(
    name="gitrot",
    help="gitrot - find comments that have gone stale next to the code they describe",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


# Import the command to register it
from .analyze import main as _main  # noqa: F401, E402

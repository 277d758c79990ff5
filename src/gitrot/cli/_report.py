"""Render analysis reports: stale pairs, block dumps, statistics, JSON."""

import json
from datetime import datetime, timezone
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..blocks.models import Block, SourceFile
from ..core import FileReport
from ..matcher import StalePair


def render_stale_pairs(console: Console, reports: list[FileReport], range_days: int) -> None:
    """One summary line per analyzed file, then one line per stale pair."""
    for report in reports:
        if not report.ok:
            continue
        count = len(report.stale_pairs)
        color = "yellow" if count else "green"
        console.print(
            f"Found [{color}]{count}[/{color}] stale block pairs exceeding {range_days} days:",
            soft_wrap=True,
        )
        for pair in report.stale_pairs:
            console.print(format_stale_pair(report.path, pair), soft_wrap=True)


def format_stale_pair(path: str, pair: StalePair) -> str:
    return (
        f"==> [bold]{escape(path)}[/bold]: Stale Range ([red]{pair.age_gap_days} Days[/red]) "
        f"(Lines {pair.comment_line} to {pair.code_line}) "
        f"(Blocks {pair.comment.id}, {pair.code.id})"
    )


def render_block_dump(console: Console, source: SourceFile) -> None:
    """Print every block of a file with its lines."""
    console.print(f"***** {escape(source.path)} *****", style="bold", soft_wrap=True)
    for index, block in enumerate(source.blocks):
        console.print(
            f"==> {block.name} {index} ({block.line_count} lines):",
            style="cyan",
            markup=False,
            soft_wrap=True,
        )
        for line in block.lines:
            console.print(
                f"{line.sequence_number} {line.content}",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
    console.print()


def render_stats(console: Console, reports: list[FileReport]) -> None:
    console.print(f"Total Files: {len(reports)}")

    table = Table(show_lines=False, pad_edge=True)
    table.add_column("File", style="bold", overflow="fold")
    table.add_column("Lines", justify="right")
    table.add_column("Blank", justify="right")
    table.add_column("Comment", justify="right", style="cyan")
    table.add_column("Code", justify="right", style="green")
    table.add_column("Stale", justify="right", style="yellow")

    for report in reports:
        source = report.source
        if source is None:
            table.add_row(escape(report.path), "-", "-", "-", "-", "[red]skipped[/red]")
            continue
        table.add_row(
            escape(report.path),
            str(source.line_count),
            str(source.blank_blocks),
            str(source.comment_blocks),
            str(source.code_blocks),
            str(len(report.stale_pairs)),
        )

    console.print(table)


def render_errors(console: Console, reports: list[FileReport]) -> None:
    for report in reports:
        if report.error is not None:
            console.print(
                f"[red]Skipped {escape(report.path)}:[/red] {escape(report.error.message)}",
                soft_wrap=True,
            )
            reason = report.error.details.get("reason")
            if reason and reason not in report.error.message:
                console.print(f"  [dim]{escape(reason)}[/dim]", soft_wrap=True)
        elif report.truncated:
            console.print(
                f"[yellow]Warning:[/yellow] {escape(report.path)}: blame output was "
                "malformed; only the lines before the bad record were analyzed",
                soft_wrap=True,
            )


def output_json(reports: list[FileReport], range_days: Optional[int]) -> None:
    """Machine-readable JSON output."""
    payload = {
        "range_days": range_days,
        "files": [report_to_dict(r) for r in reports],
    }
    print(json.dumps(payload, indent=2))


def report_to_dict(report: FileReport) -> dict[str, Any]:
    source = report.source
    return {
        "path": report.path,
        "error": str(report.error) if report.error is not None else None,
        "truncated": report.truncated,
        "stats": None
        if source is None
        else {
            "lines": source.line_count,
            "blank_blocks": source.blank_blocks,
            "comment_blocks": source.comment_blocks,
            "code_blocks": source.code_blocks,
        },
        "stale_pairs": [
            {
                "age_gap_days": pair.age_gap_days,
                "comment": _block_to_dict(pair.comment),
                "code": _block_to_dict(pair.code),
            }
            for pair in report.stale_pairs
        ],
    }


def _block_to_dict(block: Block) -> dict[str, Any]:
    return {
        "id": block.id,
        "first_line": block.first_line_number,
        "last_line": block.last_line_number,
        "freshness": datetime.fromtimestamp(block.freshness, tz=timezone.utc).isoformat(),
    }

"""CLI entry point: buildlog-compdb.

Usage:
    buildlog-compdb path/to/buildfre.log           # writes compile_commands.json beside the log
    buildlog-compdb buildfre.log -o out/compile_commands.json
    buildlog-compdb buildfre.log --flush-trailing --timings
"""

from __future__ import annotations

import sys

import click

from buildlog_compdb.core.logging import setup_logging
from buildlog_compdb.exceptions import CompdbError
from buildlog_compdb.pipeline import generate
from buildlog_compdb.progress import ProgressTracker

_STATUS_ICONS = {
    "completed": "+",
    "failed": "!",
    "skipped": "-",
    "running": "~",
}


def _print_counts(existing: int, new: int) -> None:
    click.echo(f"There are {existing} existing compile commands and {new} new compile commands")


def _print_summary(progress: ProgressTracker) -> None:
    summary = progress.get_summary()
    click.echo(f"\nPipeline summary (total: {summary['total_duration']}s):")
    for p in summary["phases"]:
        status_icon = _STATUS_ICONS.get(p["status"], "?")
        duration = f" ({p['duration']}s)" if p["duration"] is not None else ""
        detail = f" - {p['detail']}" if p["detail"] else ""
        click.echo(f"  [{status_icon}] {p['phase']}{duration}{detail}")


@click.command()
@click.argument("log_path", type=click.Path(dir_okay=False))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Database path (default: compile_commands.json next to the log)",
)
@click.option(
    "--flush-trailing",
    is_flag=True,
    envvar="COMPDB_FLUSH_TRAILING",
    help="Keep a command that is still open when the log ends",
)
@click.option("--timings", is_flag=True, help="Print per-phase timings")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    log_path: str,
    output: str | None,
    flush_trailing: bool,
    timings: bool,
    verbose: bool,
) -> None:
    """Generate or update compile_commands.json from a build.exe log."""
    setup_logging("DEBUG" if verbose else None)

    progress = ProgressTracker()
    try:
        result = generate(
            log_path,
            output_path=output,
            flush_trailing=flush_trailing,
            progress=progress,
            on_counts=_print_counts,
        )
    except CompdbError as e:
        if timings:
            _print_summary(progress)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Successfully wrote compile commands to {result.output_path}")
    if timings:
        _print_summary(progress)


if __name__ == "__main__":
    main()

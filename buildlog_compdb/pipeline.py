"""End-to-end pipeline: build log → merged compile_commands.json."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

import structlog

from buildlog_compdb.database import (
    default_database_path,
    load_entries,
    read_log,
    save_entries,
)
from buildlog_compdb.extractor import extract_entries
from buildlog_compdb.log_parser import DEFAULT_TAG_WIDTH, BuildLogParser
from buildlog_compdb.merger import merge_entries
from buildlog_compdb.progress import ProgressTracker

log = structlog.get_logger("buildlog_compdb.pipeline")


@dataclass
class GenerateResult:
    output_path: Path
    raw_command_count: int
    existing_count: int
    new_count: int
    merged_count: int


@contextmanager
def _phase(progress: ProgressTracker, name: str) -> Iterator[None]:
    progress.start_phase(name)
    try:
        yield
    except Exception as exc:
        progress.fail_phase(name, str(exc))
        raise


def generate(
    log_path: str | Path,
    output_path: str | Path | None = None,
    flush_trailing: bool = False,
    tag_width: int = DEFAULT_TAG_WIDTH,
    progress: ProgressTracker | None = None,
    on_counts: Callable[[int, int], None] | None = None,
) -> GenerateResult:
    """Parse ``log_path`` and merge its entries into the compile database.

    Every phase runs to completion before the database is written, so any
    failure leaves an existing database untouched.

    Args:
        log_path: Build log to parse.
        output_path: Database location (default: next to the log).
        flush_trailing: Keep a command still open at end of log.
        tag_width: Digits in the build tool's thread tags.
        progress: Tracker receiving phase updates (a fresh one if omitted).
        on_counts: Called with (existing, new) entry counts before merging.
    """
    progress = progress or ProgressTracker()
    db_path = Path(output_path) if output_path else default_database_path(log_path)
    structlog.contextvars.bind_contextvars(log_path=str(log_path))
    try:
        with _phase(progress, "read_log"):
            text = read_log(log_path)
            progress.complete_phase("read_log", detail=f"{len(text)} chars")

        with _phase(progress, "parse"):
            parser = BuildLogParser(tag_width=tag_width, flush_trailing=flush_trailing)
            raw_commands = parser.parse(text)
            progress.complete_phase("parse", detail=f"{len(raw_commands)} commands")

        with _phase(progress, "extract"):
            new_entries = extract_entries(raw_commands)
            progress.complete_phase("extract", detail=f"{len(new_entries)} entries")

        if db_path.exists():
            with _phase(progress, "load_existing"):
                existing = load_entries(db_path)
                progress.complete_phase("load_existing", detail=f"{len(existing)} entries")
        else:
            existing = []
            progress.skip_phase("load_existing", f"no database at {db_path}")

        if on_counts is not None:
            on_counts(len(existing), len(new_entries))

        with _phase(progress, "merge"):
            merged = merge_entries(existing, new_entries)
            progress.complete_phase("merge", detail=f"{len(merged)} entries")

        with _phase(progress, "write"):
            save_entries(db_path, merged)
            progress.complete_phase("write", detail=str(db_path))
    finally:
        structlog.contextvars.unbind_contextvars("log_path")

    log.info(
        "pipeline.done",
        output=str(db_path),
        existing=len(existing),
        new=len(new_entries),
        merged=len(merged),
    )
    return GenerateResult(
        output_path=db_path,
        raw_command_count=len(raw_commands),
        existing_count=len(existing),
        new_count=len(new_entries),
        merged_count=len(merged),
    )

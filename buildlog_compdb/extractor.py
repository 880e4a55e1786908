"""Entry extractor: one compile_commands.json entry per source file of a RawCommand."""

from __future__ import annotations

import os
from collections.abc import Iterable

import structlog

from buildlog_compdb.exceptions import PathResolutionError
from buildlog_compdb.models import CompileCommandsEntry, RawCommand

log = structlog.get_logger("buildlog_compdb.extractor")


def resolve_path(directory: str, path: str) -> str:
    """Join ``path`` onto ``directory`` and return a normalized absolute path.

    Absolute ``path`` values are returned normalized and otherwise unchanged.
    ``.`` and ``..`` are collapsed lexically; symlinks are not followed.
    """
    joined = os.path.join(directory, path)
    if "\0" in joined:
        raise PathResolutionError(joined)
    try:
        return os.path.abspath(joined)
    except (ValueError, OSError) as exc:
        raise PathResolutionError(joined) from exc


def entries_from_raw_command(raw: RawCommand) -> list[CompileCommandsEntry]:
    """Build one entry per source file compiled by ``raw``.

    All entries share ``directory`` and ``command``; a command compiling no
    recognized source yields an empty list.
    """
    sources = raw.source_files
    if not sources:
        log.debug("extractor.no_sources", thread=raw.thread, directory=raw.directory)
        return []

    directory = resolve_path(raw.directory, ".")
    command = raw.full_command
    return [
        CompileCommandsEntry(
            directory=directory,
            command=command,
            file=resolve_path(raw.directory, source),
        )
        for source in sources
    ]


def extract_entries(raw_commands: Iterable[RawCommand]) -> list[CompileCommandsEntry]:
    """Flatten all RawCommands into entries, preserving log order."""
    entries: list[CompileCommandsEntry] = []
    for raw in raw_commands:
        entries.extend(entries_from_raw_command(raw))
    return entries

"""Merge freshly extracted entries into an existing compile database."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from buildlog_compdb.models import CompileCommandsEntry

log = structlog.get_logger("buildlog_compdb.merge")


def merge_entries(
    existing: Iterable[CompileCommandsEntry],
    new: Iterable[CompileCommandsEntry],
) -> list[CompileCommandsEntry]:
    """Merge two entry sets keyed by ``file``.

    Existing entries go in first so that a new entry for the same file
    overwrites it; within ``new`` the later entry wins as well. Entries only
    present in ``existing`` are kept. Stale files are not pruned.

    Returns:
        Merged entries sorted by ``file``.
    """
    by_file: dict[str, CompileCommandsEntry] = {}
    for entry in existing:
        by_file[entry.file] = entry

    replaced = 0
    for entry in new:
        prev = by_file.get(entry.file)
        if prev is not None and prev != entry:
            replaced += 1
            log.debug(
                "merge.entry_replaced",
                file=entry.file,
                old_command=prev.command,
                new_command=entry.command,
            )
        by_file[entry.file] = entry

    log.debug("merge.done", total=len(by_file), replaced=replaced)
    return [by_file[f] for f in sorted(by_file)]

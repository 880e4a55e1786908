"""Data models for raw build-log commands and compile database entries."""

from buildlog_compdb.models.compdb import (
    SOURCE_SUFFIXES,
    CompileCommandsEntry,
    RawCommand,
)

__all__ = ["SOURCE_SUFFIXES", "CompileCommandsEntry", "RawCommand"]

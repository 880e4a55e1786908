"""buildlog-compdb: compile_commands.json from multi-threaded build logs."""

__version__ = "0.1.0"

from buildlog_compdb.database import default_database_path, load_entries, save_entries
from buildlog_compdb.exceptions import (
    CompdbError,
    DatabaseFormatError,
    DatabaseReadError,
    DatabaseWriteError,
    LogReadError,
    MissingThreadDirectoryError,
    PathResolutionError,
)
from buildlog_compdb.extractor import entries_from_raw_command, extract_entries
from buildlog_compdb.log_parser import BuildLogParser, parse_build_log
from buildlog_compdb.merger import merge_entries
from buildlog_compdb.models import CompileCommandsEntry, RawCommand
from buildlog_compdb.pipeline import GenerateResult, generate

__all__ = [
    "BuildLogParser",
    "CompdbError",
    "CompileCommandsEntry",
    "DatabaseFormatError",
    "DatabaseReadError",
    "DatabaseWriteError",
    "GenerateResult",
    "LogReadError",
    "MissingThreadDirectoryError",
    "PathResolutionError",
    "RawCommand",
    "default_database_path",
    "entries_from_raw_command",
    "extract_entries",
    "generate",
    "load_entries",
    "merge_entries",
    "parse_build_log",
    "save_entries",
]

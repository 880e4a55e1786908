"""compile_commands.json and build log file I/O."""

from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path

import structlog
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from buildlog_compdb.exceptions import (
    DatabaseFormatError,
    DatabaseReadError,
    DatabaseWriteError,
    LogReadError,
)
from buildlog_compdb.models import CompileCommandsEntry

log = structlog.get_logger("buildlog_compdb.database")

DATABASE_FILENAME = "compile_commands.json"

_ENTRIES_ADAPTER = TypeAdapter(list[CompileCommandsEntry])


def default_database_path(log_path: str | Path) -> Path:
    """compile_commands.json in the directory that holds the log."""
    return Path(os.path.abspath(log_path)).parent / DATABASE_FILENAME


def read_log(path: str | Path) -> str:
    """Read the build log as UTF-8; undecodable bytes are a read error."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LogReadError(str(path)) from exc


def load_entries(path: str | Path) -> list[CompileCommandsEntry]:
    """Load an existing database; a missing file is an empty database."""
    db_path = Path(path)
    if not db_path.exists():
        log.debug("database.not_found", path=str(db_path))
        return []

    try:
        content = db_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DatabaseReadError(str(db_path)) from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise DatabaseFormatError(str(db_path), f"invalid JSON: {exc}") from exc

    try:
        entries = _ENTRIES_ADAPTER.validate_python(data)
    except PydanticValidationError as exc:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(part) for part in err["loc"])
            messages.append(f"{loc}: {err['msg']}")
        raise DatabaseFormatError(str(db_path), "; ".join(messages)) from exc

    log.debug("database.loaded", path=str(db_path), entries=len(entries))
    return entries


def _target_mode(db_path: Path) -> int:
    """Mode of the file being replaced, or the umask default for a new one."""
    try:
        return stat.S_IMODE(db_path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def save_entries(path: str | Path, entries: list[CompileCommandsEntry]) -> None:
    """Write ``entries`` as pretty-printed JSON, replacing ``path`` atomically."""
    db_path = Path(path)
    rows = [entry.model_dump() for entry in entries]
    payload = json.dumps(rows, indent=2, ensure_ascii=False) + "\n"

    tmp_name: str | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{db_path.name}.", suffix=".tmp", dir=db_path.parent
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.chmod(tmp_name, _target_mode(db_path))
        os.replace(tmp_name, db_path)
        tmp_name = None
    except OSError as exc:
        raise DatabaseWriteError(str(db_path)) from exc
    finally:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)

    log.debug("database.saved", path=str(db_path), entries=len(entries))

"""Raw command and compile_commands.json entry models."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, StrictStr

# Suffix match is case-sensitive: foo.CPP and foo.cppx are not sources.
SOURCE_SUFFIXES = (".c", ".cpp")


@dataclass
class RawCommand:
    """One compiler invocation reassembled from the build log."""

    directory: str  # as announced by the build tool, absolute or log-relative
    lines: list[str] = field(default_factory=list)  # continuation-stripped fragments
    thread: str = ""  # thread tag the command was read from

    @property
    def full_command(self) -> str:
        return " ".join(self.lines)

    @property
    def source_files(self) -> list[str]:
        """Tokens across all lines that name a C/C++ source file."""
        return [
            token
            for line in self.lines
            for token in line.split()
            if token.endswith(SOURCE_SUFFIXES)
        ]


class CompileCommandsEntry(BaseModel):
    """A single compile_commands.json row, keyed by ``file``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    directory: StrictStr
    command: StrictStr
    file: StrictStr

"""Build log parser: reassembles compiler invocations from interleaved thread output.

The build tool prefixes every line with a fixed-width thread tag and a ``>``::

    0003>BUILDMSG: Processing d:\\src\\net\\http
    0003>cl /nologo /c /Zi
    0001>Compiling d:\\src\\base ***********
    0003>   /DWIN32 request.cpp
    0003>   response.cpp

Wrapped command lines are indented by three spaces after the tag. Lines of
other threads may appear anywhere, so a command ends at the first line that
does not carry its own thread's continuation prefix.
"""

from __future__ import annotations

import enum
import re

import structlog

from buildlog_compdb.exceptions import MissingThreadDirectoryError
from buildlog_compdb.models import RawCommand

log = structlog.get_logger("buildlog_compdb.parser")

DEFAULT_TAG_WIDTH = 4
CONTINUATION_INDENT = "   "


def split_lines(text: str) -> list[str]:
    r"""Split on ``\n`` only, dropping one trailing ``\r`` per line.

    Form feeds and other Unicode line breaks stay inside the line; a final
    newline does not produce an empty last line.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class ParserState(enum.Enum):
    LOOKING_FOR_COMMAND = "looking_for_command"
    READING_COMMAND = "reading_command"


class BuildLogParser:
    """
    Two-state parser turning a build log into an ordered list of RawCommands.

    Each call to :meth:`parse` starts from a clean thread→directory map; a
    thread's directory sticks until the thread announces a new one.
    """

    def __init__(self, tag_width: int = DEFAULT_TAG_WIDTH, flush_trailing: bool = False) -> None:
        """
        Args:
            tag_width: Number of ASCII digits in a thread tag.
            flush_trailing: Emit a command still being read at end of input
                instead of dropping it.
        """
        if tag_width < 1:
            raise ValueError(f"tag_width must be positive, got {tag_width}")
        self.tag_width = tag_width
        self.flush_trailing = flush_trailing

        tag = rf"([0-9]{{{tag_width}}})>"
        self._command_re = re.compile(rf"^{tag}cl\s")
        # Tried in order; only the first match on a line applies.
        self._dir_regexes = [
            re.compile(rf"^{tag}BUILDMSG: Processing (.+)$"),
            re.compile(rf"^{tag}Compiling (.+) \*+$"),
        ]

    @property
    def strip_width(self) -> int:
        """Characters removed from the front of command lines: tag plus ``>``."""
        return self.tag_width + 1

    def continuation_prefix(self, thread: str) -> str:
        return f"{thread}>{CONTINUATION_INDENT}"

    def parse(self, text: str) -> list[RawCommand]:
        raw_commands: list[RawCommand] = []
        dirs: dict[str, str] = {}

        state = ParserState.LOOKING_FOR_COMMAND
        cur_lines: list[str] = []
        cur_thread = ""
        cur_prefix = ""

        for line in split_lines(text):
            if state is ParserState.READING_COMMAND:
                if line.startswith(cur_prefix):
                    cur_lines.append(self._strip_tag(line))
                    continue
                raw_commands.append(self._finalize(cur_thread, cur_lines, dirs))
                cur_lines = []
                state = ParserState.LOOKING_FOR_COMMAND
                # Fall through: the terminating line may itself start a
                # command or announce a directory.

            m = self._command_re.match(line)
            if m:
                cur_thread = m.group(1)
                cur_prefix = self.continuation_prefix(cur_thread)
                cur_lines = [self._strip_tag(line)]
                state = ParserState.READING_COMMAND
                continue

            self._match_directory(line, dirs)

        if state is ParserState.READING_COMMAND:
            if self.flush_trailing:
                raw_commands.append(self._finalize(cur_thread, cur_lines, dirs))
            else:
                log.warning(
                    "parser.trailing_command_dropped",
                    thread=cur_thread,
                    lines=len(cur_lines),
                )

        log.debug(
            "parser.done",
            commands=len(raw_commands),
            threads=len(dirs),
        )
        return raw_commands

    def _strip_tag(self, line: str) -> str:
        return line[self.strip_width :].strip()

    def _match_directory(self, line: str, dirs: dict[str, str]) -> None:
        for dir_re in self._dir_regexes:
            m = dir_re.match(line)
            if m:
                thread, directory = m.group(1), m.group(2)
                if dirs.get(thread) != directory:
                    log.debug("parser.thread_directory", thread=thread, directory=directory)
                dirs[thread] = directory
                return

    def _finalize(self, thread: str, lines: list[str], dirs: dict[str, str]) -> RawCommand:
        directory = dirs.get(thread)
        if directory is None:
            raise MissingThreadDirectoryError(thread)
        log.debug("parser.command_finalized", thread=thread, lines=len(lines))
        return RawCommand(directory=directory, lines=lines, thread=thread)


def parse_build_log(
    text: str,
    tag_width: int = DEFAULT_TAG_WIDTH,
    flush_trailing: bool = False,
) -> list[RawCommand]:
    """Parse a whole build log into RawCommands (convenience wrapper)."""
    return BuildLogParser(tag_width=tag_width, flush_trailing=flush_trailing).parse(text)

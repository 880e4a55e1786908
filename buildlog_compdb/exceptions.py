"""Custom exceptions for buildlog-compdb."""


class CompdbError(Exception):
    """Base exception for all compile-database generation errors."""


class MissingThreadDirectoryError(CompdbError):
    """Raised when a command ends on a thread that never announced a directory."""

    def __init__(self, thread: str):
        self.thread = thread
        super().__init__(
            f"Unable to determine directory for thread {thread}: no "
            f"'BUILDMSG: Processing' or 'Compiling ... ****' line precedes its command"
        )


class PathResolutionError(CompdbError):
    """Raised when a source token cannot be turned into an absolute path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Failed to resolve path for {path!r}")


class LogReadError(CompdbError):
    """Raised when the build log cannot be read."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Failed to read build log from {path}")


class DatabaseReadError(CompdbError):
    """Raised when an existing compile_commands.json cannot be read."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Failed to read existing compile commands from {path}")


class DatabaseFormatError(CompdbError):
    """Raised when an existing compile_commands.json is not a valid database."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse existing compile commands from {path}: {reason}")


class DatabaseWriteError(CompdbError):
    """Raised when the merged database cannot be written."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Failed to write compile commands to {path}")

"""Exception types raised while applying an edit.

Every error carries the process exit code the CLI reports for it:
1 for usage and precondition problems detected before the engine runs,
2 for failures inside the engine (including backup and write failures).
"""

EXIT_SUCCESS = 0
EXIT_USAGE = 1
EXIT_ENGINE = 2


class AutoEditError(Exception):
    """Base class for all autoedit failures."""

    exit_code = EXIT_ENGINE


class UsageError(AutoEditError):
    """Bad or missing command-line arguments."""

    exit_code = EXIT_USAGE


class PreconditionError(AutoEditError):
    """Target file missing, snippet empty, or snippet file unreadable."""

    exit_code = EXIT_USAGE


class EngineError(AutoEditError):
    """The insertion engine could not produce new content."""

    exit_code = EXIT_ENGINE


class MissingPatternError(EngineError):
    """A pattern-anchored mode was requested without a pattern."""

    def __init__(self, mode_name: str):
        super().__init__(f"--pattern is required for {mode_name} mode")
        self.mode_name = mode_name


class PatternNotFoundError(EngineError):
    """The anchor pattern did not match anywhere in the file."""

    def __init__(self, pattern: str):
        super().__init__(f"Pattern not found: {pattern}")
        self.pattern = pattern


class InvalidPatternError(EngineError):
    """The anchor pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern


class UnsupportedModeError(EngineError, ValueError):
    """The mode string does not name one of the insertion modes."""

    def __init__(self, mode: str):
        super().__init__(f"Unsupported mode: {mode}")
        self.mode = mode


class WriteError(EngineError, OSError):
    """Creating the backup or writing the target file failed."""


class ReadError(EngineError, OSError):
    """The target file could not be read."""

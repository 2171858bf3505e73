"""Error types raised by scripture."""
from typing import Optional


class ScriptureError(Exception):
    """Base class for every error scripture reports to its caller.

    Attributes:
        kind: Short machine-readable error kind
        message: Human-readable explanation
        line: Optional 1-based line number the error refers to
    """

    kind = "error"

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is not None:
            return f"{self.message} (line {self.line})"
        return self.message


class ParseError(ScriptureError):
    """The message has no discernible subject."""

    kind = "parse"


class StructureError(ScriptureError):
    """Subject and body are not separated by exactly one blank line."""

    kind = "structure"


class ConfigError(ScriptureError):
    """The configuration file is malformed or inconsistent."""

    kind = "config"


class MessageIOError(ScriptureError):
    """Reading or writing a message file failed."""

    kind = "io"

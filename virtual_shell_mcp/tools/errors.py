"""Error taxonomy for shell commands.

Every error is informational: the interpreter turns it into a single
error line and leaves the session otherwise untouched.
"""

from enum import StrEnum

from .base import ToolError


class ErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    UNKNOWN_COMMAND = "unknown_command"


class ShellError(ToolError):
    """Base class for errors raised by shell command handlers."""

    kind: ErrorKind


class NotFoundError(ShellError):
    """The path resolves to no node, or to a node of the wrong kind."""

    kind = ErrorKind.NOT_FOUND


class InvalidArgumentError(ShellError):
    """A required argument is missing."""

    kind = ErrorKind.INVALID_ARGUMENT


class UnknownCommandError(ShellError):
    kind = ErrorKind.UNKNOWN_COMMAND

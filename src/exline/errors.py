"""Application-level exception types for exline."""

from __future__ import annotations


class ExError(Exception):
    """Base exception for exline."""


class ExParseError(ExError):
    """Base exception for failures while parsing one command segment."""


class UnknownCommandError(ExParseError):
    """Raised when no registered command matches the typed name."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Unknown command: {token}")
        self.token = token


class TrailingCharactersError(ExParseError):
    """Raised when text is left over after a command that takes no more arguments."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Trailing characters: {text}")
        self.text = text


class ExCommandError(ExError):
    """Base exception for failures reported by a command handler."""


class MissingArgumentError(ExCommandError):
    """Raised when a required argument is empty."""

    def __init__(self, command: str) -> None:
        super().__init__(f"Argument required: {command}")
        self.command = command


class ExternalCommandError(ExCommandError):
    """Raised when a spawned process cannot be started or exits non-zero."""

    def __init__(self, message: str, *, status: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.stderr = stderr

    @classmethod
    def from_exit(cls, status: int, stderr: str) -> ExternalCommandError:
        return cls(f"[{status}] {stderr}", status=status, stderr=stderr)


class CollaboratorError(ExCommandError):
    """Raised when a collaborator rejects a request."""


class ScriptError(ExCommandError):
    """Raised when script evaluation fails."""

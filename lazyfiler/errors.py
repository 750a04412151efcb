"""Failure taxonomy shared by collaborators and action handlers.

Collaborators raise these; ``interaction.actions`` converts them into
user-visible messages at the action boundary.
"""

from __future__ import annotations

from pathlib import Path


class LazyfilerError(Exception):
    """Base class for every user-reportable failure."""


class NavigationFailure(LazyfilerError):
    """A directory could not be listed or entered."""

    NOT_FOUND = "not_found"
    NOT_A_DIRECTORY = "not_a_directory"
    PERMISSION_DENIED = "permission_denied"
    READ_ERROR = "read_error"

    def __init__(self, path: Path, reason: str, detail: str = "") -> None:
        self.path = path
        self.reason = reason
        self.detail = detail
        message = f"{path}: {reason.replace('_', ' ')}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class MutationFailure(LazyfilerError):
    """A create, move, copy or delete did not take effect."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


class PreviewFailure(LazyfilerError):
    """A file could not be read for preview."""


class ToolUnavailable(LazyfilerError):
    """A required external program is not installed."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(tool)


class InputRejected(LazyfilerError):
    """Operator input failed validation."""


__all__ = [
    "LazyfilerError",
    "NavigationFailure",
    "MutationFailure",
    "PreviewFailure",
    "ToolUnavailable",
    "InputRejected",
]

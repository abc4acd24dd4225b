"""Error taxonomy and error bookkeeping for the Workspace Bridge server."""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, Optional

import git
from git.exc import BadName, BadObject
from pydantic import ValidationError

logger = logging.getLogger(__name__)


class WorkspaceBridgeError(Exception):
    """Base class for every error raised by the server itself."""


class ProjectNotFoundError(WorkspaceBridgeError):
    """Raised when a project name is not in the registry."""

    def __init__(self, name: str, available: Iterable[str] = ()):
        self.name = name
        self.available = list(available)
        listing = (
            ", ".join(self.available)
            if self.available
            else "none (use addProject tool first)"
        )
        super().__init__(f"Unknown project: {name}. Available projects: {listing}")


class ProjectNotADirectoryError(WorkspaceBridgeError):
    """Raised when a path offered for registration is not a directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path is not a directory: {path}")


class NotAGitRepositoryError(WorkspaceBridgeError):
    def __init__(self, project: str, root: str):
        self.project = project
        self.root = root
        super().__init__(f"Project '{project}' at {root} is not a git repository")


class ProjectFileNotFoundError(WorkspaceBridgeError):
    def __init__(self, file: str, project: str):
        self.file = file
        self.project = project
        super().__init__(f"File '{file}' not found in project '{project}'")


class CommitNotFoundError(WorkspaceBridgeError):
    def __init__(self, commit_hash: str):
        self.commit_hash = commit_hash
        super().__init__(f"Commit '{commit_hash}' not found")


class ToolExecutionError(WorkspaceBridgeError):
    """The single error shape a failed tool call surfaces to the client.

    The message is ``"<operation prefix>: <original message>"`` and the
    original exception is kept as ``__cause__``.
    """

    def __init__(self, tool: str, prefix: str, error: BaseException):
        self.tool = tool
        self.kind = classify_error(error)
        super().__init__(f"{prefix}: {error}")


class ErrorKind(Enum):
    """Kinds of failure a tool call can end with."""

    PROJECT_NOT_FOUND = "project_not_found"
    NOT_A_DIRECTORY = "not_a_directory"
    NOT_A_GIT_REPOSITORY = "not_a_git_repository"
    FILE_NOT_FOUND = "file_not_found"
    COMMIT_NOT_FOUND = "commit_not_found"
    INVALID_INPUT = "invalid_input"
    COLLABORATOR_FAILURE = "collaborator_failure"


def classify_error(error: BaseException) -> ErrorKind:
    """Map an exception to its :class:`ErrorKind`.

    Filesystem and GitPython errors that have a direct counterpart in the
    taxonomy are folded into it; everything else is a collaborator failure.
    """
    if isinstance(error, ToolExecutionError):
        return error.kind
    if isinstance(error, ProjectNotFoundError):
        return ErrorKind.PROJECT_NOT_FOUND
    if isinstance(error, (ProjectNotADirectoryError, NotADirectoryError)):
        return ErrorKind.NOT_A_DIRECTORY
    if isinstance(error, (NotAGitRepositoryError, git.InvalidGitRepositoryError)):
        return ErrorKind.NOT_A_GIT_REPOSITORY
    if isinstance(error, (ProjectFileNotFoundError, FileNotFoundError)):
        return ErrorKind.FILE_NOT_FOUND
    if isinstance(error, (CommitNotFoundError, BadName, BadObject)):
        return ErrorKind.COMMIT_NOT_FOUND
    if isinstance(error, ValidationError):
        return ErrorKind.INVALID_INPUT
    return ErrorKind.COLLABORATOR_FAILURE


# Error metrics tracking
_error_stats: Dict[str, Any] = {
    "total_errors": 0,
    "errors_by_kind": {kind.value: 0 for kind in ErrorKind},
    "errors_by_tool": {},
}


def record_error_metric(kind: ErrorKind, tool: Optional[str] = None) -> None:
    """Count a failed tool call."""
    _error_stats["total_errors"] += 1
    _error_stats["errors_by_kind"][kind.value] += 1
    if tool:
        _error_stats["errors_by_tool"][tool] = (
            _error_stats["errors_by_tool"].get(tool, 0) + 1
        )


def get_error_stats() -> Dict[str, Any]:
    """Get current error statistics."""
    return {
        "total_errors": _error_stats["total_errors"],
        "errors_by_kind": dict(_error_stats["errors_by_kind"]),
        "errors_by_tool": dict(_error_stats["errors_by_tool"]),
    }


def reset_error_stats() -> None:
    """Reset error statistics (useful for testing)."""
    global _error_stats
    _error_stats = {
        "total_errors": 0,
        "errors_by_kind": {kind.value: 0 for kind in ErrorKind},
        "errors_by_tool": {},
    }

"""Tests for error classification and failure bookkeeping."""

import git
import pytest
from git.exc import BadName
from pydantic import ValidationError

from mcp_server_workspace_bridge.error_handling import (
    CommitNotFoundError,
    ErrorKind,
    NotAGitRepositoryError,
    ProjectFileNotFoundError,
    ProjectNotADirectoryError,
    ProjectNotFoundError,
    ToolExecutionError,
    WorkspaceBridgeError,
    classify_error,
    get_error_stats,
    record_error_metric,
    reset_error_stats,
)
from mcp_server_workspace_bridge.files.models import ReadFile


def validation_error() -> ValidationError:
    with pytest.raises(ValidationError) as exc_info:
        ReadFile.model_validate({})
    return exc_info.value


class TestClassifyError:
    @pytest.mark.parametrize(
        "error,kind",
        [
            (ProjectNotFoundError("x"), ErrorKind.PROJECT_NOT_FOUND),
            (ProjectNotADirectoryError("/tmp/f"), ErrorKind.NOT_A_DIRECTORY),
            (NotADirectoryError("not a dir"), ErrorKind.NOT_A_DIRECTORY),
            (NotAGitRepositoryError("p", "/tmp/p"), ErrorKind.NOT_A_GIT_REPOSITORY),
            (git.InvalidGitRepositoryError("/tmp/p"), ErrorKind.NOT_A_GIT_REPOSITORY),
            (ProjectFileNotFoundError("f", "p"), ErrorKind.FILE_NOT_FOUND),
            (FileNotFoundError("gone"), ErrorKind.FILE_NOT_FOUND),
            (CommitNotFoundError("abc"), ErrorKind.COMMIT_NOT_FOUND),
            (BadName("abc"), ErrorKind.COMMIT_NOT_FOUND),
            (git.GitCommandError("log", 128), ErrorKind.COLLABORATOR_FAILURE),
            (PermissionError("denied"), ErrorKind.COLLABORATOR_FAILURE),
            (UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad"), ErrorKind.COLLABORATOR_FAILURE),
        ],
    )
    def test_kinds(self, error, kind):
        assert classify_error(error) is kind

    def test_validation_error_is_invalid_input(self):
        assert classify_error(validation_error()) is ErrorKind.INVALID_INPUT

    def test_wrapped_error_keeps_original_kind(self):
        wrapped = ToolExecutionError("readFile", "Failed to read file", FileNotFoundError("x"))
        assert classify_error(wrapped) is ErrorKind.FILE_NOT_FOUND


class TestMessages:
    def test_project_not_found_lists_available(self):
        error = ProjectNotFoundError("ghost", ["app", "lib"])
        assert str(error) == "Unknown project: ghost. Available projects: app, lib"

    def test_project_not_found_on_empty_registry(self):
        assert str(ProjectNotFoundError("ghost")) == (
            "Unknown project: ghost. Available projects: none (use addProject tool first)"
        )

    def test_tool_execution_error_prefixes_message(self):
        error = ToolExecutionError(
            "getCommitDetails", "Failed to get commit details", CommitNotFoundError("abc")
        )

        assert str(error) == "Failed to get commit details: Commit 'abc' not found"
        assert error.tool == "getCommitDetails"
        assert error.kind is ErrorKind.COMMIT_NOT_FOUND
        assert isinstance(error, WorkspaceBridgeError)


class TestErrorStats:
    def test_starts_empty(self):
        stats = get_error_stats()
        assert stats["total_errors"] == 0
        assert set(stats["errors_by_kind"]) == {kind.value for kind in ErrorKind}
        assert stats["errors_by_tool"] == {}

    def test_records_by_kind_and_tool(self):
        record_error_metric(ErrorKind.FILE_NOT_FOUND, "readFile")
        record_error_metric(ErrorKind.FILE_NOT_FOUND, "readFile")
        record_error_metric(ErrorKind.COMMIT_NOT_FOUND)

        stats = get_error_stats()
        assert stats["total_errors"] == 3
        assert stats["errors_by_kind"]["file_not_found"] == 2
        assert stats["errors_by_kind"]["commit_not_found"] == 1
        assert stats["errors_by_tool"] == {"readFile": 2}

    def test_returned_stats_are_copies(self):
        get_error_stats()["errors_by_tool"]["readFile"] = 99
        assert get_error_stats()["errors_by_tool"] == {}

    def test_reset(self):
        record_error_metric(ErrorKind.INVALID_INPUT, "addProject")
        reset_error_stats()
        assert get_error_stats()["total_errors"] == 0

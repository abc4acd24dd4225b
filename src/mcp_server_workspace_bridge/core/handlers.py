"""Tool call handlers for MCP Workspace Bridge"""

import asyncio
import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

from git import Repo
from mcp.types import TextContent

from ..error_handling import (
    ErrorKind,
    ToolExecutionError,
    classify_error,
    record_error_metric,
)
from ..files.models import ListFiles, ReadFile
from ..files.operations import list_files, read_file
from ..git.models import (
    CompareBranches,
    GetCommitDetails,
    GetCommitHistory,
    GetFileHistory,
    GetRepositoryInfo,
    GitBlame,
    SearchCommits,
)
from ..git.operations import (
    git_blame,
    git_commit_details,
    git_commit_history,
    git_compare_branches,
    git_file_history,
    git_repository_info,
    git_search_commits,
    open_repository,
)
from ..projects.models import AddProject, ListProjects, RemoveProject
from ..projects.operations import add_project, list_projects, remove_project
from ..projects.registry import ProjectRegistry, directory_path
from .tools import ToolCategory, ToolDefinition, ToolRegistry, WorkspaceTools

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Failures the caller caused; logged below ERROR
_EXPECTED_KINDS = {
    ErrorKind.PROJECT_NOT_FOUND,
    ErrorKind.NOT_A_DIRECTORY,
    ErrorKind.NOT_A_GIT_REPOSITORY,
    ErrorKind.FILE_NOT_FOUND,
    ErrorKind.COMMIT_NOT_FOUND,
    ErrorKind.INVALID_INPUT,
}


def to_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


async def run_git(
    projects: ProjectRegistry,
    project: str,
    operation: Callable[[Repo, Path], T],
) -> T:
    """Resolve ``project`` and run ``operation`` against its repository.

    Resolution happens before the first suspension point; the repository is
    opened and queried in a worker thread against that resolved path.
    """
    root = projects.resolve(project)

    def run() -> T:
        with open_repository(project, root) as repo:
            return operation(repo, root)

    return await asyncio.to_thread(run)


# Project registry tools


async def handle_list_projects(projects: ProjectRegistry, args: ListProjects) -> str:
    return list_projects(projects)


async def handle_add_project(projects: ProjectRegistry, args: AddProject) -> str:
    directory = await asyncio.to_thread(directory_path, args.path)
    return add_project(projects, args.name, directory)


async def handle_remove_project(projects: ProjectRegistry, args: RemoveProject) -> str:
    return remove_project(projects, args.name)


# File access tools


async def handle_list_files(projects: ProjectRegistry, args: ListFiles) -> str:
    root = projects.resolve(args.project)
    return await asyncio.to_thread(list_files, root, args.dir)


async def handle_read_file(projects: ProjectRegistry, args: ReadFile) -> str:
    root = projects.resolve(args.project)
    return await asyncio.to_thread(read_file, root, args.file)


# Git history tools


async def handle_get_commit_history(
    projects: ProjectRegistry, args: GetCommitHistory
) -> str:
    commits = await run_git(
        projects,
        args.project,
        lambda repo, root: git_commit_history(
            repo,
            branch=args.branch,
            max_count=args.max_count,
            skip=args.skip,
            author=args.author,
            since=args.since,
            until=args.until,
        ),
    )
    return to_json(
        {
            "project": args.project,
            "branch": args.branch or "(current)",
            "count": len(commits),
            "commits": commits,
        }
    )


async def handle_search_commits(projects: ProjectRegistry, args: SearchCommits) -> str:
    commits = await run_git(
        projects,
        args.project,
        lambda repo, root: git_search_commits(
            repo,
            args.query,
            search_in_diff=args.search_in_diff,
            max_count=args.max_count,
            author=args.author,
        ),
    )
    return to_json(
        {
            "project": args.project,
            "query": args.query,
            "searchInDiff": args.search_in_diff,
            "count": len(commits),
            "commits": commits,
        }
    )


async def handle_get_commit_details(
    projects: ProjectRegistry, args: GetCommitDetails
) -> str:
    details = await run_git(
        projects,
        args.project,
        lambda repo, root: git_commit_details(repo, args.commit_hash),
    )
    return to_json({"project": args.project, **details})


async def handle_get_file_history(
    projects: ProjectRegistry, args: GetFileHistory
) -> str:
    commits = await run_git(
        projects,
        args.project,
        lambda repo, root: git_file_history(repo, root, args.file, args.max_count),
    )
    return to_json(
        {
            "project": args.project,
            "file": args.file,
            "count": len(commits),
            "commits": commits,
        }
    )


async def handle_git_blame(projects: ProjectRegistry, args: GitBlame) -> str:
    lines = await run_git(
        projects,
        args.project,
        lambda repo, root: git_blame(
            repo, root, args.project, args.file, args.start_line, args.end_line
        ),
    )
    return to_json({"project": args.project, "file": args.file, "lines": lines})


async def handle_get_repository_info(
    projects: ProjectRegistry, args: GetRepositoryInfo
) -> str:
    info = await run_git(
        projects, args.project, lambda repo, root: git_repository_info(repo)
    )
    return to_json({"project": args.project, **info})


async def handle_compare_branches(
    projects: ProjectRegistry, args: CompareBranches
) -> str:
    comparison = await run_git(
        projects,
        args.project,
        lambda repo, root: git_compare_branches(
            repo, args.base_branch, args.compare_branch
        ),
    )
    return to_json(
        {
            "project": args.project,
            "baseBranch": args.base_branch,
            "compareBranch": args.compare_branch,
            **comparison,
        }
    )


DEFAULT_TOOLS: List[ToolDefinition] = [
    ToolDefinition(
        name=WorkspaceTools.ADD_PROJECT,
        category=ToolCategory.PROJECT,
        description="Add a project to the workspace bridge for cross-project file access",
        schema=AddProject,
        handler=handle_add_project,
        error_prefix="Failed to add project",
    ),
    ToolDefinition(
        name=WorkspaceTools.REMOVE_PROJECT,
        category=ToolCategory.PROJECT,
        description="Remove a project from the workspace bridge",
        schema=RemoveProject,
        handler=handle_remove_project,
        error_prefix="Failed to remove project",
    ),
    ToolDefinition(
        name=WorkspaceTools.LIST_PROJECTS,
        category=ToolCategory.PROJECT,
        description="List all registered projects in the workspace bridge",
        schema=ListProjects,
        handler=handle_list_projects,
        error_prefix="Failed to list projects",
    ),
    ToolDefinition(
        name=WorkspaceTools.LIST_FILES,
        category=ToolCategory.FILE,
        description="List files in a given project directory",
        schema=ListFiles,
        handler=handle_list_files,
        error_prefix="Failed to list files",
    ),
    ToolDefinition(
        name=WorkspaceTools.READ_FILE,
        category=ToolCategory.FILE,
        description="Read a file content from a given project",
        schema=ReadFile,
        handler=handle_read_file,
        error_prefix="Failed to read file",
    ),
    ToolDefinition(
        name=WorkspaceTools.GET_COMMIT_HISTORY,
        category=ToolCategory.GIT,
        description="Get git commit history for a project",
        schema=GetCommitHistory,
        handler=handle_get_commit_history,
        error_prefix="Failed to get commit history",
    ),
    ToolDefinition(
        name=WorkspaceTools.SEARCH_COMMITS,
        category=ToolCategory.GIT,
        description="Search through git commit messages and optionally code changes",
        schema=SearchCommits,
        handler=handle_search_commits,
        error_prefix="Failed to search commits",
    ),
    ToolDefinition(
        name=WorkspaceTools.GET_COMMIT_DETAILS,
        category=ToolCategory.GIT,
        description="Get detailed information about a specific git commit including diff",
        schema=GetCommitDetails,
        handler=handle_get_commit_details,
        error_prefix="Failed to get commit details",
    ),
    ToolDefinition(
        name=WorkspaceTools.GET_FILE_HISTORY,
        category=ToolCategory.GIT,
        description="Get git commit history for a specific file",
        schema=GetFileHistory,
        handler=handle_get_file_history,
        error_prefix="Failed to get file history",
    ),
    ToolDefinition(
        name=WorkspaceTools.GIT_BLAME,
        category=ToolCategory.GIT,
        description="Show who last modified each line in a file (git blame)",
        schema=GitBlame,
        handler=handle_git_blame,
        error_prefix="Failed to get git blame",
    ),
    ToolDefinition(
        name=WorkspaceTools.GET_REPOSITORY_INFO,
        category=ToolCategory.GIT,
        description="Get git repository information including branches, remotes, and current status",
        schema=GetRepositoryInfo,
        handler=handle_get_repository_info,
        error_prefix="Failed to get repository info",
    ),
    ToolDefinition(
        name=WorkspaceTools.COMPARE_BRANCHES,
        category=ToolCategory.GIT,
        description="Compare commits between two git branches",
        schema=CompareBranches,
        handler=handle_compare_branches,
        error_prefix="Failed to compare branches",
    ),
]


class CallToolHandler:
    """Validates arguments, dispatches to the tool and wraps the outcome.

    A successful call yields exactly one ``TextContent``; a failed call
    raises :class:`ToolExecutionError` carrying the prefixed message.
    """

    def __init__(self, projects: ProjectRegistry, tools: Optional[List[ToolDefinition]] = None):
        self.projects = projects
        self.registry = ToolRegistry()
        for tool_def in tools if tools is not None else DEFAULT_TOOLS:
            self.registry.register(tool_def)

    async def call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]]
    ) -> List[TextContent]:
        request_id = os.urandom(4).hex()
        start_time = time.time()
        log_extra = {"request_id": request_id, "tool": name}

        tool_def = self.registry.get_tool(name)
        if tool_def is None:
            logger.error(f"❓ [{request_id}] Unknown tool '{name}'", extra=log_extra)
            raise ValueError(
                f"Unknown tool: {name}. Available tools: {', '.join(self.registry.tool_names())}"
            )

        arguments = arguments or {}
        if "project" in arguments:
            log_extra["project"] = arguments["project"]
        logger.info(f"🔧 [{request_id}] Tool call: {name}", extra=log_extra)
        logger.debug(f"🔧 [{request_id}] Arguments: {arguments}", extra=log_extra)

        try:
            args = tool_def.schema.model_validate(arguments)
            text = await tool_def.handler(self.projects, args)
        except Exception as e:
            duration_ms = round((time.time() - start_time) * 1000, 2)
            kind = classify_error(e)
            record_error_metric(kind, name)
            level = logging.WARNING if kind in _EXPECTED_KINDS else logging.ERROR
            logger.log(
                level,
                f"❌ [{request_id}] Tool '{name}' failed ({kind.value}) after {duration_ms}ms: {e}",
                extra={**log_extra, "duration_ms": duration_ms},
                exc_info=level >= logging.ERROR,
            )
            raise ToolExecutionError(name, tool_def.error_prefix, e) from e

        duration_ms = round((time.time() - start_time) * 1000, 2)
        logger.info(
            f"✅ [{request_id}] Tool '{name}' completed in {duration_ms}ms",
            extra={**log_extra, "duration_ms": duration_ms},
        )
        return [TextContent(type="text", text=text)]

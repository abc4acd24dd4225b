"""Git history operations for MCP Workspace Bridge"""

import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from git import Commit, InvalidGitRepositoryError, RemoteReference, Repo
from git.exc import BadName, BadObject

from ..error_handling import (
    CommitNotFoundError,
    NotAGitRepositoryError,
    ProjectFileNotFoundError,
)
from ..files.operations import project_file_path

logger = logging.getLogger(__name__)

DIFF_MATCH_BODY = "(found in code changes)"

_BLAME_HEADER = re.compile(r"^([0-9a-f]{40}|[0-9a-f]{64}) (\d+) (\d+)")
_AHEAD = re.compile(r"\bahead (\d+)")
_BEHIND = re.compile(r"\bbehind (\d+)")


def open_repository(project: str, root: Path) -> Repo:
    """Open the repository containing ``root``.

    ``root`` may be a subdirectory of a work tree; the repository is found
    by walking up, as ``git rev-parse --is-inside-work-tree`` would.
    """
    try:
        repo = Repo(root, search_parent_directories=True)
    except InvalidGitRepositoryError:
        raise NotAGitRepositoryError(project, str(root)) from None

    if repo.bare:
        repo.close()
        raise NotAGitRepositoryError(project, str(root))
    return repo


def repo_relative_path(repo: Repo, root: Path, file: str) -> str:
    """Path of a project file relative to the repository work tree, POSIX style"""
    full = project_file_path(root, file)
    relative = os.path.relpath(full, repo.working_tree_dir)
    return Path(relative).as_posix()


def format_commit(commit: Commit) -> Dict[str, str]:
    """Commit record shared by every history tool"""
    message = commit.message
    if isinstance(message, bytes):
        message = message.decode("utf-8", errors="replace")
    lines = message.split("\n", 1)
    body = lines[1].strip() if len(lines) > 1 else ""
    return {
        "hash": commit.hexsha,
        "author": commit.author.name,
        "email": commit.author.email,
        "date": commit.authored_datetime.isoformat(),
        "message": lines[0].strip(),
        "body": body,
    }


def git_commit_history(
    repo: Repo,
    branch: Optional[str] = None,
    max_count: int = 50,
    skip: int = 0,
    author: Optional[str] = None,
    since: Optional[str] = None,
    until: Optional[str] = None,
) -> List[Dict[str, str]]:
    """Commits reachable from ``branch`` (or HEAD), newest first"""
    kwargs: Dict[str, Any] = {"max_count": max_count}
    if skip:
        kwargs["skip"] = skip
    if author:
        kwargs["author"] = author
    if since:
        kwargs["since"] = since
    if until:
        kwargs["until"] = until

    return [format_commit(c) for c in repo.iter_commits(rev=branch or None, **kwargs)]


def git_pickaxe_search(
    repo: Repo, term: str, max_count: int = 50, author: Optional[str] = None
) -> List[Commit]:
    """Commits whose diff adds or removes ``term`` (``git log -S``)"""
    args = [
        f"-S{term}",
        "--regexp-ignore-case",
        f"--max-count={max_count}",
        "--format=%H",
    ]
    if author:
        args.append(f"--author={author}")

    output = repo.git.log(*args)
    return [repo.commit(line.strip()) for line in output.splitlines() if line.strip()]


def git_search_commits(
    repo: Repo,
    query: str,
    search_in_diff: bool = False,
    max_count: int = 50,
    author: Optional[str] = None,
) -> List[Dict[str, str]]:
    """Search commit messages, and optionally diffs, for ``query``.

    Message matches come first and win over diff matches for the same hash;
    the merged list is cut to ``max_count``.
    """
    kwargs: Dict[str, Any] = {
        "max_count": max_count,
        "grep": query,
        "regexp_ignore_case": True,
    }
    if author:
        kwargs["author"] = author

    commits = [format_commit(c) for c in repo.iter_commits(**kwargs)]
    if not search_in_diff:
        return commits

    merged: Dict[str, Dict[str, str]] = {c["hash"]: c for c in commits}
    for commit in git_pickaxe_search(repo, query, max_count, author):
        if commit.hexsha not in merged:
            record = format_commit(commit)
            record["body"] = DIFF_MATCH_BODY
            merged[commit.hexsha] = record

    return list(merged.values())[:max_count]


def git_commit_details(repo: Repo, commit_hash: str) -> Dict[str, Any]:
    """Metadata, ``--stat`` summary and full diff of one commit"""
    try:
        commit = repo.commit(commit_hash)
        record = format_commit(commit)
    except (BadName, BadObject, ValueError):
        raise CommitNotFoundError(commit_hash) from None

    return {
        "commit": record,
        "stats": repo.git.show("--stat", "--oneline", commit.hexsha),
        "diff": repo.git.show(commit.hexsha),
    }


def git_file_history(
    repo: Repo, root: Path, file: str, max_count: int = 50
) -> List[Dict[str, str]]:
    path = repo_relative_path(repo, root, file)
    commits = repo.iter_commits(paths=path, max_count=max_count)
    return [format_commit(c) for c in commits]


def parse_blame_porcelain(output: str) -> List[Dict[str, Any]]:
    """Parse ``git blame --line-porcelain`` output into one record per line.

    Each record opens with ``<sha> <orig-line> <final-line>``, carries
    ``author``, ``author-time`` and ``summary`` headers, and ends with the
    tab-prefixed source line.
    """
    records: List[Dict[str, Any]] = []
    current: Optional[Dict[str, Any]] = None

    for line in output.split("\n"):
        if line.startswith("\t"):
            if current is not None:
                current["content"] = line[1:]
                records.append(current)
                current = None
            continue

        header = _BLAME_HEADER.match(line)
        if header:
            current = {"hash": header.group(1), "lineNum": int(header.group(3))}
        elif current is None:
            continue
        elif line.startswith("author "):
            current["author"] = line[len("author "):]
        elif line.startswith("author-time "):
            timestamp = int(line[len("author-time "):])
            current["date"] = datetime.fromtimestamp(
                timestamp, tz=timezone.utc
            ).isoformat()
        elif line.startswith("summary "):
            current["summary"] = line[len("summary "):]

    return records


def git_blame(
    repo: Repo,
    root: Path,
    project: str,
    file: str,
    start_line: Optional[int] = None,
    end_line: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Line attribution for ``file``.

    The range only applies when both bounds are given.
    """
    if not project_file_path(root, file).exists():
        raise ProjectFileNotFoundError(file, project)

    args = ["--line-porcelain"]
    if start_line and end_line:
        args.append(f"-L{start_line},{end_line}")
    args.extend(["--", repo_relative_path(repo, root, file)])

    return parse_blame_porcelain(repo.git.blame(*args))


def _unquote(path: str) -> str:
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        return path[1:-1]
    return path


def parse_status_porcelain(output: str) -> Dict[str, Any]:
    """Parse ``git status --porcelain=v1 --branch`` output"""
    status: Dict[str, Any] = {
        "modified": [],
        "created": [],
        "deleted": [],
        "renamed": [],
        "staged": [],
        "notAdded": [],
        "ahead": 0,
        "behind": 0,
    }

    for line in output.splitlines():
        if line.startswith("## "):
            ahead = _AHEAD.search(line)
            behind = _BEHIND.search(line)
            status["ahead"] = int(ahead.group(1)) if ahead else 0
            status["behind"] = int(behind.group(1)) if behind else 0
            continue
        if len(line) < 4:
            continue

        index, worktree, path = line[0], line[1], line[3:]
        if index == "?":
            status["notAdded"].append(_unquote(path))
            continue
        if index == "!":
            continue

        if index in "RC" and " -> " in path:
            original, path = path.split(" -> ", 1)
            status["renamed"].append({"from": _unquote(original), "to": _unquote(path)})
        path = _unquote(path)

        if index == "A":
            status["created"].append(path)
        if "D" in (index, worktree):
            status["deleted"].append(path)
        if "M" in (index, worktree):
            status["modified"].append(path)
        if index != " ":
            status["staged"].append(path)

    return status


def git_status(repo: Repo) -> Dict[str, Any]:
    """Working tree status with ahead/behind counts"""
    return parse_status_porcelain(repo.git.status("--porcelain=v1", "--branch"))


def git_repository_info(repo: Repo) -> Dict[str, Any]:
    """Current branch, branches, remotes, tags and working tree status"""
    try:
        current_branch: Optional[str] = repo.active_branch.name
    except TypeError:  # Detached HEAD
        current_branch = None

    branches = [head.name for head in repo.heads]
    branches.extend(
        ref.name for ref in repo.references if isinstance(ref, RemoteReference)
    )

    remotes = []
    for remote in repo.remotes:
        fetch_url = remote.config_reader.get_value("url", "")
        push_url = remote.config_reader.get_value("pushurl", fetch_url)
        remotes.append({"name": remote.name, "fetchUrl": fetch_url, "pushUrl": push_url})

    return {
        "currentBranch": current_branch,
        "branches": {"all": branches, "current": current_branch},
        "remotes": remotes,
        "tags": [tag.name for tag in repo.tags],
        "status": git_status(repo),
    }


def git_compare_branches(
    repo: Repo, base_branch: str, compare_branch: str
) -> Dict[str, Any]:
    """Commits on ``compare_branch`` missing from ``base_branch``, plus diff stat"""
    commits = [
        format_commit(c) for c in repo.iter_commits(f"{base_branch}..{compare_branch}")
    ]
    diff_stats = repo.git.diff("--stat", f"{base_branch}...{compare_branch}")
    return {
        "commitsAhead": len(commits),
        "commits": commits,
        "diffStats": diff_stats,
    }

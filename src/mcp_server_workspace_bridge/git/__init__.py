"""Git history operations for MCP Workspace Bridge"""

from .operations import *
from .models import *

__all__ = [
    # Repository access
    "open_repository",
    "repo_relative_path",
    "format_commit",
    # History queries
    "git_commit_history",
    "git_search_commits",
    "git_pickaxe_search",
    "git_commit_details",
    "git_file_history",
    "git_blame",
    "git_status",
    "git_repository_info",
    "git_compare_branches",
    # Parsers
    "parse_blame_porcelain",
    "parse_status_porcelain",
    # Tool inputs
    "GetCommitHistory",
    "SearchCommits",
    "GetCommitDetails",
    "GetFileHistory",
    "GitBlame",
    "GetRepositoryInfo",
    "CompareBranches",
]

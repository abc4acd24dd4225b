"""Pydantic models for git history tools

Field names are snake_case; the wire names are the camelCase aliases.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def reject_option_like_ref(value: Optional[str]) -> Optional[str]:
    """Reject ref names git would parse as command line options."""
    if value and value.startswith("-"):
        raise ValueError(f"Invalid ref '{value}': must not start with '-'")
    return value


class GitToolInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project: str = Field(description="Project name")


class GetCommitHistory(GitToolInput):
    branch: Optional[str] = Field(
        default=None, description="Branch name (defaults to current branch)"
    )
    max_count: int = Field(
        default=50,
        alias="maxCount",
        description="Maximum number of commits to return (default: 50)",
    )
    skip: int = Field(
        default=0, description="Number of commits to skip for pagination"
    )
    author: Optional[str] = Field(
        default=None, description="Filter commits by author name or email"
    )
    since: Optional[str] = Field(
        default=None,
        description="Show commits since date (e.g., '2024-01-01', '1 week ago')",
    )
    until: Optional[str] = Field(default=None, description="Show commits until date")

    @field_validator("branch")
    @classmethod
    def validate_branch(cls, v: Optional[str]) -> Optional[str]:
        return reject_option_like_ref(v)


class SearchCommits(GitToolInput):
    query: str = Field(description="Search term to find in commit messages")
    search_in_diff: bool = Field(
        default=False,
        alias="searchInDiff",
        description="Also search in code changes/diffs (default: false)",
    )
    max_count: int = Field(
        default=50,
        alias="maxCount",
        description="Maximum number of results (default: 50)",
    )
    author: Optional[str] = Field(
        default=None, description="Filter by author name or email"
    )


class GetCommitDetails(GitToolInput):
    commit_hash: str = Field(
        alias="commitHash", description="Commit hash (full or short)"
    )


class GetFileHistory(GitToolInput):
    file: str = Field(description="File path relative to project root")
    max_count: int = Field(
        default=50,
        alias="maxCount",
        description="Maximum number of commits to return (default: 50)",
    )


class GitBlame(GitToolInput):
    file: str = Field(description="File path relative to project root")
    start_line: Optional[int] = Field(
        default=None, alias="startLine", description="Start line number (optional)"
    )
    end_line: Optional[int] = Field(
        default=None, alias="endLine", description="End line number (optional)"
    )


class GetRepositoryInfo(GitToolInput):
    pass


class CompareBranches(GitToolInput):
    base_branch: str = Field(alias="baseBranch", description="Base branch name")
    compare_branch: str = Field(
        alias="compareBranch", description="Branch to compare against base"
    )

    @field_validator("base_branch", "compare_branch")
    @classmethod
    def validate_branches(cls, v: str) -> str:
        return reject_option_like_ref(v)

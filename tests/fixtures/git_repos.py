"""
Git repository fixtures for testing.

Provides factory functions for creating test git repositories
with various states and configurations.
"""

import subprocess
from pathlib import Path
from typing import List, Optional


def run_git(path: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=path, check=True, capture_output=True, text=True
    )
    return result.stdout.strip()


class GitRepositoryFactory:
    """Factory for creating test git repositories."""

    @staticmethod
    def init_repo(path: Path) -> Path:
        """Create an empty repository on branch ``main``."""
        path.mkdir(parents=True, exist_ok=True)

        run_git(path, "init")
        run_git(path, "symbolic-ref", "HEAD", "refs/heads/main")
        run_git(path, "config", "user.name", "Test User")
        run_git(path, "config", "user.email", "test@example.com")
        run_git(path, "config", "commit.gpgsign", "false")

        return path

    @staticmethod
    def commit_file(
        path: Path,
        file_name: str,
        content: str,
        message: str,
        author: Optional[str] = None,
    ) -> str:
        """Write ``file_name``, commit it and return the new commit hash."""
        file_path = path / file_name
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content)
        run_git(path, "add", file_name)

        args = ["commit", "-m", message]
        if author:
            args.append(f"--author={author}")
        run_git(path, *args)
        return run_git(path, "rev-parse", "HEAD")

    @staticmethod
    def create_clean_repo(path: Path) -> Path:
        """Create a clean git repository with initial commit."""
        GitRepositoryFactory.init_repo(path)
        GitRepositoryFactory.commit_file(
            path, "README.md", "# Test Repository\n", "Initial commit"
        )
        return path

    @staticmethod
    def create_dirty_repo(path: Path, modified_files: Optional[List[str]] = None) -> Path:
        """Create a git repository with uncommitted changes."""
        GitRepositoryFactory.create_clean_repo(path)

        if modified_files is None:
            modified_files = ["modified.txt", "new_file.txt"]

        for file_name in modified_files:
            (path / file_name).write_text(f"Content of {file_name}")

        return path

    @staticmethod
    def create_repo_with_branches(path: Path, branches: List[str]) -> Path:
        """Create a git repository with one extra commit on each branch."""
        GitRepositoryFactory.create_clean_repo(path)

        for branch in branches:
            run_git(path, "checkout", "-b", branch, "main")
            GitRepositoryFactory.commit_file(
                path,
                f"{branch}_file.txt",
                f"Content from {branch} branch\n",
                f"Add {branch} file",
            )

        # Return to main branch
        run_git(path, "checkout", "main")

        return path

    @staticmethod
    def create_repo_with_history(path: Path, commit_count: int = 5) -> Path:
        """Create a git repository with specified number of commits."""
        GitRepositoryFactory.create_clean_repo(path)

        for i in range(1, commit_count):
            GitRepositoryFactory.commit_file(
                path, f"file_{i}.txt", f"Content for commit {i}\n", f"Commit {i}"
            )

        return path

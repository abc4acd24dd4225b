"""
Global pytest configuration and fixtures.

Provides temporary directories, real git repositories built with the
``git`` command line, and a project registry wired to them.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from fixtures.git_repos import GitRepositoryFactory
from mcp_server_workspace_bridge.error_handling import reset_error_stats
from mcp_server_workspace_bridge.projects.registry import ProjectRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def git_repo_factory():
    """Provide access to GitRepositoryFactory."""
    return GitRepositoryFactory


@pytest.fixture
def clean_git_repo(temp_dir: Path) -> Path:
    """Create a clean git repository for testing."""
    return GitRepositoryFactory.create_clean_repo(temp_dir / "clean_repo")


@pytest.fixture
def dirty_git_repo(temp_dir: Path) -> Path:
    """Create a git repository with uncommitted changes."""
    return GitRepositoryFactory.create_dirty_repo(temp_dir / "dirty_repo")


@pytest.fixture
def multi_branch_repo(temp_dir: Path) -> Path:
    """Create a git repository with multiple branches."""
    return GitRepositoryFactory.create_repo_with_branches(
        temp_dir / "multi_branch_repo",
        ["feature-1", "feature-2", "bugfix"]
    )


@pytest.fixture
def history_repo(temp_dir: Path) -> Path:
    """Create a git repository with five commits."""
    return GitRepositoryFactory.create_repo_with_history(temp_dir / "history_repo")


@pytest.fixture
def projects() -> ProjectRegistry:
    """An empty project registry."""
    return ProjectRegistry()


@pytest.fixture(autouse=True)
def clean_error_stats():
    reset_error_stats()
    yield
    reset_error_stats()


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests between components")


def pytest_collection_modifyitems(config, items):
    """Mark tests that build real git repositories."""
    git_fixtures = {
        "clean_git_repo",
        "dirty_git_repo",
        "multi_branch_repo",
        "history_repo",
        "git_repo_factory",
    }
    for item in items:
        if git_fixtures.intersection(item.fixturenames):
            item.add_marker(pytest.mark.requires_git)

"""Tests for the listProjects / addProject / removeProject text renderers."""

import pytest

from mcp_server_workspace_bridge.error_handling import ProjectNotFoundError
from mcp_server_workspace_bridge.projects.operations import (
    add_project,
    list_projects,
    remove_project,
)


def test_list_projects_empty(projects):
    assert list_projects(projects) == (
        "No projects registered yet. Use the 'addProject' tool to add projects."
    )


def test_list_projects_formats_each_entry(projects, temp_dir):
    (temp_dir / "app").mkdir()
    (temp_dir / "lib").mkdir()
    projects.insert("app", temp_dir / "app")
    projects.insert("lib", temp_dir / "lib")

    text = list_projects(projects)

    assert text.startswith("📁 Registered Projects (2):\n\n")
    assert f"  • app\n    {temp_dir / 'app'}" in text
    assert f"  • lib\n    {temp_dir / 'lib'}" in text


def test_add_project_returns_updated_listing(projects, temp_dir):
    text = add_project(projects, "lib", str(temp_dir))

    assert text.startswith(f"✅ Successfully added project 'lib' at {temp_dir}")
    assert "Registered projects:\n" in text
    assert f"  - lib: {temp_dir}" in text


def test_remove_project_lists_remaining(projects, temp_dir):
    (temp_dir / "app").mkdir()
    projects.insert("app", temp_dir / "app")
    projects.insert("lib", temp_dir)

    text = remove_project(projects, "lib")

    assert text.startswith("✅ Successfully removed project 'lib'")
    assert f"  - app: {temp_dir / 'app'}" in text
    assert "lib:" not in text


def test_remove_last_project_shows_none(projects, temp_dir):
    projects.insert("lib", temp_dir)
    assert remove_project(projects, "lib").endswith("Remaining projects:\n  (none)")


def test_remove_unknown_project(projects):
    with pytest.raises(ProjectNotFoundError):
        remove_project(projects, "lib")

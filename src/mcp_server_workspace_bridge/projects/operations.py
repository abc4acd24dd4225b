"""Project registry tools: list, add and remove projects"""

import logging

from .registry import PathLike, ProjectRegistry, format_project_listing

logger = logging.getLogger(__name__)


def list_projects(registry: ProjectRegistry) -> str:
    """Human-readable listing of every registered project"""
    projects = registry.list_all()
    if not projects:
        return "No projects registered yet. Use the 'addProject' tool to add projects."

    blocks = [f"  • {name}\n    {path}" for name, path in projects]
    return f"📁 Registered Projects ({len(projects)}):\n\n" + "\n\n".join(blocks)


def add_project(registry: ProjectRegistry, name: str, directory: PathLike) -> str:
    """Register ``directory`` under ``name``; an existing name is overwritten.

    ``directory`` must already have been checked with :func:`directory_path`.
    """
    resolved = registry.register(name, directory)
    logger.info(f"Added project '{name}' at {resolved}")
    return (
        f"✅ Successfully added project '{name}' at {resolved}\n\n"
        f"Registered projects:\n{format_project_listing(registry)}"
    )


def remove_project(registry: ProjectRegistry, name: str) -> str:
    registry.remove(name)
    logger.info(f"Removed project '{name}'")
    return (
        f"✅ Successfully removed project '{name}'\n\n"
        f"Remaining projects:\n{format_project_listing(registry)}"
    )

"""Project registry for MCP Workspace Bridge"""

from .loader import LINK_FILE_NAME, LinkFileResult, LinkFileStatus, load_projects, read_link_file
from .models import AddProject, LinkedProject, LinkFile, ListProjects, RemoveProject
from .operations import add_project, list_projects, remove_project
from .registry import ProjectRegistry, absolute_path, directory_path, format_project_listing

__all__ = [
    # Registry
    "ProjectRegistry",
    "absolute_path",
    "directory_path",
    "format_project_listing",
    # Link file loading
    "LINK_FILE_NAME",
    "LinkFileResult",
    "LinkFileStatus",
    "load_projects",
    "read_link_file",
    # Models
    "LinkedProject",
    "LinkFile",
    "ListProjects",
    "AddProject",
    "RemoveProject",
    # Registry tools
    "list_projects",
    "add_project",
    "remove_project",
]

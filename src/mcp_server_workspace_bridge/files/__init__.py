"""File access operations for MCP Workspace Bridge"""

from .models import ListFiles, ReadFile
from .operations import list_directory, list_files, project_file_path, read_file

__all__ = [
    "ListFiles",
    "ReadFile",
    "list_directory",
    "list_files",
    "project_file_path",
    "read_file",
]

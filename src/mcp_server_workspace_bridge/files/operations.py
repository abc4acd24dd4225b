"""File access operations for MCP Workspace Bridge"""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def project_file_path(root: Path, relative: str = "") -> Path:
    """Join ``relative`` onto the project root.

    A leading separator is read as "from the project root", not as a
    filesystem-absolute path.
    """
    relative = relative.lstrip("/\\")
    return root / relative if relative else root


def list_directory(path: Path) -> list[dict[str, str]]:
    """Entries of ``path`` as ``{"name", "type"}`` records sorted by name"""
    with os.scandir(path) as entries:
        items = [
            {
                "name": entry.name,
                "type": "directory" if entry.is_dir(follow_symlinks=False) else "file",
            }
            for entry in entries
        ]
    return sorted(items, key=lambda item: item["name"])


def list_files(root: Path, dir: str = "") -> str:
    """List a project directory as JSON"""
    target = project_file_path(root, dir)
    logger.debug(f"Listing {target}")
    return json.dumps(list_directory(target), indent=2, ensure_ascii=False)


def read_file(root: Path, file: str) -> str:
    """Read a project file as UTF-8 text, line endings untouched"""
    target = project_file_path(root, file)
    logger.debug(f"Reading {target}")
    return target.read_bytes().decode("utf-8")

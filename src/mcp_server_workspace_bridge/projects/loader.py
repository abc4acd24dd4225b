"""Startup loading of the current project and its linked projects.

The current project is always registered under the final segment of its
directory. Linked projects come from ``.workspace-bridge.json`` in that same
directory::

    {"projects": [{"name": "shared", "path": "../shared-lib"}]}

Relative paths are resolved against the current project directory. Linked
projects' own link files are never read.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from .models import LinkFile
from .registry import PathLike, ProjectRegistry, absolute_path

logger = logging.getLogger(__name__)

LINK_FILE_NAME = ".workspace-bridge.json"


class LinkFileStatus(str, Enum):
    ABSENT = "absent"
    MALFORMED = "malformed"
    VALID = "valid"


@dataclass
class LinkFileResult:
    """Outcome of reading a link file."""

    status: LinkFileStatus
    path: Path
    link_file: Optional[LinkFile] = None
    error: Optional[str] = None


def read_link_file(project_dir: PathLike) -> LinkFileResult:
    """Read and validate ``<project_dir>/.workspace-bridge.json``.

    Never raises for a missing or broken file; the status says which it was.
    """
    link_path = absolute_path(project_dir) / LINK_FILE_NAME
    try:
        content = link_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return LinkFileResult(LinkFileStatus.ABSENT, link_path)
    except (OSError, ValueError) as e:
        return LinkFileResult(LinkFileStatus.MALFORMED, link_path, error=str(e))

    try:
        link_file = LinkFile.model_validate_json(content)
    except ValueError as e:
        return LinkFileResult(LinkFileStatus.MALFORMED, link_path, error=str(e))

    return LinkFileResult(LinkFileStatus.VALID, link_path, link_file=link_file)


def load_projects(current_project_dir: PathLike) -> Tuple[ProjectRegistry, str]:
    """Build the registry for a server rooted at ``current_project_dir``.

    Returns the registry and the name the current project was registered under.
    Linked paths are not checked for existence here.
    """
    current_path = absolute_path(current_project_dir)
    current_name = current_path.name or str(current_path)

    registry = ProjectRegistry()
    registry.register(current_name, current_path)

    result = read_link_file(current_path)
    if result.status is LinkFileStatus.ABSENT:
        logger.debug(f"No {LINK_FILE_NAME} in {current_path}")
        return registry, current_name

    if result.status is LinkFileStatus.MALFORMED:
        logger.warning(f"⚠️  Error reading {LINK_FILE_NAME}: {result.error}")
        return registry, current_name

    for entry in result.link_file.linked_projects():
        resolved = registry.register(
            entry.name, absolute_path(entry.path, base=current_path)
        )
        logger.info(f"✓ Linked project: {entry.name} → {resolved}")

    return registry, current_name

"""In-memory registry of named projects"""

import logging
import os
import stat
from pathlib import Path
from typing import Dict, Iterator, List, Tuple, Union

from ..error_handling import ProjectNotADirectoryError, ProjectNotFoundError

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def absolute_path(raw_path: PathLike, base: PathLike | None = None) -> Path:
    """Absolute, normalized form of ``raw_path``.

    Relative paths are joined onto ``base`` (or the working directory).
    Symlinks are left as they are.
    """
    raw = os.fspath(raw_path)
    if base is not None and not os.path.isabs(raw):
        raw = os.path.join(os.fspath(base), raw)
    return Path(os.path.abspath(raw))


def directory_path(raw_path: PathLike) -> Path:
    """Absolute form of ``raw_path``, which must be a directory.

    Touches the filesystem; ``stat`` errors such as FileNotFoundError and
    PermissionError propagate.
    """
    path = absolute_path(raw_path)
    if not stat.S_ISDIR(path.stat().st_mode):
        raise ProjectNotADirectoryError(os.fspath(raw_path))
    return path


class ProjectRegistry:
    """Mapping from project name to absolute directory path.

    One instance is built at startup and handed to every tool handler.
    Re-inserting an existing name replaces its path.
    """

    def __init__(self):
        self._projects: Dict[str, Path] = {}

    def insert(self, name: str, raw_path: PathLike) -> Path:
        """Register ``raw_path`` under ``name`` after checking it is a directory."""
        return self.register(name, directory_path(raw_path))

    def register(self, name: str, path: PathLike) -> Path:
        """Store ``path`` under ``name`` without touching the filesystem."""
        resolved = absolute_path(path)
        previous = self._projects.get(name)
        if previous is not None and previous != resolved:
            logger.info(f"Project '{name}' re-registered: {previous} -> {resolved}")
        self._projects[name] = resolved
        return resolved

    def resolve(self, name: str) -> Path:
        try:
            return self._projects[name]
        except KeyError:
            raise ProjectNotFoundError(name, self._projects) from None

    def remove(self, name: str) -> Path:
        if name not in self._projects:
            raise ProjectNotFoundError(name, self._projects)
        return self._projects.pop(name)

    def list_all(self) -> List[Tuple[str, Path]]:
        return list(self._projects.items())

    def names(self) -> List[str]:
        return list(self._projects)

    def __contains__(self, name: object) -> bool:
        return name in self._projects

    def __len__(self) -> int:
        return len(self._projects)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._projects))


def format_project_listing(registry: ProjectRegistry, empty: str = "  (none)") -> str:
    """Render ``  - name: path`` lines for every registered project."""
    lines = [f"  - {name}: {path}" for name, path in registry.list_all()]
    return "\n".join(lines) if lines else empty

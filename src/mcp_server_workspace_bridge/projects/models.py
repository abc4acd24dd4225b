"""Pydantic models for the project registry"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LinkedProject(BaseModel):
    """One entry of the ``projects`` list in ``.workspace-bridge.json``."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    path: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.name) and bool(self.path)


class LinkFile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    projects: list[Any] = Field(default_factory=list)

    @field_validator("projects", mode="before")
    @classmethod
    def _none_means_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def linked_projects(self) -> list[LinkedProject]:
        """Entries carrying both a non-empty name and path, in file order."""
        entries = []
        for raw in self.projects:
            if not isinstance(raw, dict):
                continue
            name, path = raw.get("name"), raw.get("path")
            if not isinstance(name, str) or not isinstance(path, str):
                continue
            entry = LinkedProject(name=name, path=path)
            if entry.is_complete:
                entries.append(entry)
        return entries


class ListProjects(BaseModel):
    pass


class AddProject(BaseModel):
    name: str = Field(
        description="Friendly name for the project (e.g., 'project_b', 'shared_lib')"
    )
    path: str = Field(description="Absolute path to the project directory")


class RemoveProject(BaseModel):
    name: str = Field(description="Name of the project to remove")

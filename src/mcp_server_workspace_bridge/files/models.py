"""Pydantic models for file access tools"""

from pydantic import BaseModel, Field


class ListFiles(BaseModel):
    project: str = Field(description="Project name")
    dir: str = Field(
        default="", description="Optional subdirectory path inside the project"
    )


class ReadFile(BaseModel):
    project: str = Field(description="Project name")
    file: str = Field(description="Relative file path from the project root")

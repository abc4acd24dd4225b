"""Tool registry and routing table for MCP Workspace Bridge"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Dict, List, Optional, Type

from mcp.types import Tool
from pydantic import BaseModel

from ..projects.registry import ProjectRegistry

logger = logging.getLogger(__name__)


class WorkspaceTools(str, Enum):
    """Enumeration of all available tools; the values are the wire names"""

    # Project registry
    LIST_PROJECTS = "listProjects"
    ADD_PROJECT = "addProject"
    REMOVE_PROJECT = "removeProject"

    # File access
    LIST_FILES = "listFiles"
    READ_FILE = "readFile"

    # Git history
    GET_COMMIT_HISTORY = "getCommitHistory"
    SEARCH_COMMITS = "searchCommits"
    GET_COMMIT_DETAILS = "getCommitDetails"
    GET_FILE_HISTORY = "getFileHistory"
    GIT_BLAME = "gitBlame"
    GET_REPOSITORY_INFO = "getRepositoryInfo"
    COMPARE_BRANCHES = "compareBranches"


class ToolCategory(str, Enum):
    """Tool categories for organization and routing"""

    PROJECT = "project"
    FILE = "file"
    GIT = "git"


ToolHandler = Callable[[ProjectRegistry, BaseModel], Awaitable[str]]


@dataclass
class ToolDefinition:
    """Complete tool definition with metadata"""

    name: WorkspaceTools
    category: ToolCategory
    description: str
    schema: Type[BaseModel]
    handler: ToolHandler
    error_prefix: str


class ToolRegistry:
    """Central registry for all MCP Workspace Bridge tools"""

    def __init__(self):
        self.tools: Dict[str, ToolDefinition] = {}

    def register(self, tool_def: ToolDefinition):
        """Register a tool in the registry"""
        self.tools[tool_def.name.value] = tool_def
        logger.debug(f"Registered tool: {tool_def.name.value} ({tool_def.category.value})")

    def get_tool(self, name: str) -> Optional[ToolDefinition]:
        """Get tool definition by name"""
        return self.tools.get(name)

    def list_tools(self) -> List[Tool]:
        """Get all tools as MCP Tool objects"""
        return [
            Tool(
                name=tool_def.name.value,
                description=tool_def.description,
                inputSchema=tool_def.schema.model_json_schema(),
            )
            for tool_def in self.tools.values()
        ]

    def get_tools_by_category(self, category: ToolCategory) -> List[ToolDefinition]:
        """Get all tools in a specific category"""
        return [
            tool_def for tool_def in self.tools.values()
            if tool_def.category == category
        ]

    def tool_names(self) -> List[str]:
        return list(self.tools)

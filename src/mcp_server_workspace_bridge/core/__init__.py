"""Core tool routing for MCP Workspace Bridge"""

from .handlers import DEFAULT_TOOLS, CallToolHandler
from .tools import ToolCategory, ToolDefinition, ToolRegistry, WorkspaceTools

__all__ = [
    "CallToolHandler",
    "DEFAULT_TOOLS",
    "ToolCategory",
    "ToolDefinition",
    "ToolRegistry",
    "WorkspaceTools",
]

import logging
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .core.handlers import CallToolHandler
from .projects.loader import LINK_FILE_NAME, load_projects
from .projects.registry import ProjectRegistry, absolute_path

SERVER_NAME = "workspace-bridge-mcp"
SERVER_VERSION = "3.0.0"

logger = logging.getLogger(__name__)


def create_server(projects: ProjectRegistry) -> Server:
    """Build the MCP server with every tool bound to ``projects``"""
    server = Server(SERVER_NAME, version=SERVER_VERSION)
    tool_handler = CallToolHandler(projects)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return tool_handler.registry.list_tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        return await tool_handler.call_tool(name, arguments)

    return server


def log_startup_summary(
    projects: ProjectRegistry, current_name: str, current_path: Path
) -> None:
    logger.info(f"🚀 {SERVER_NAME} v{SERVER_VERSION} started!")
    logger.info(f"📂 Current project: {current_name} ({current_path})")

    linked = [(name, path) for name, path in projects.list_all() if name != current_name]
    if linked:
        logger.info(f"🔗 Linked projects: {len(linked)}")
        for name, path in linked:
            logger.info(f"  • {name} → {path}")
    else:
        logger.info(
            f"📝 No linked projects. Create {LINK_FILE_NAME} to link other projects."
        )


async def serve(project_dir: Path) -> None:
    projects, current_name = load_projects(project_dir)
    server = create_server(projects)
    options = server.create_initialization_options()

    async with stdio_server() as (read_stream, write_stream):
        log_startup_summary(projects, current_name, absolute_path(project_dir))
        # raise_exceptions=False keeps one failed request from ending the session
        await server.run(read_stream, write_stream, options, raise_exceptions=False)


"""MCP server implementation."""
import asyncio
import json
import os
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.models import InitializationOptions
from mcp.server import stdio

from lx_lsp_launcher.errors import InvalidServerIdError, ResolverError, log_error
from lx_lsp_launcher.launcher import launch_command
from lx_lsp_launcher.logging import configure_logging, get_logger
from lx_lsp_launcher.resolver import BinaryResolver
from lx_lsp_launcher.status import LoggingStatusSink, StatusBoard

logger = get_logger("server")

SERVER_NAME = "lx-lsp-launcher"
SERVER_VERSION = "0.1.0"

SERVER_ID_SCHEMA = {"type": "string", "description": "Language server instance identifier"}

tools = [
    types.Tool(
        name="lx_resolve_binary",
        description="Locate the lx-lsp binary, installing it with `go install` if missing",
        inputSchema={
            "type": "object",
            "properties": {"server_id": SERVER_ID_SCHEMA},
            "required": ["server_id"],
        },
    ),
    types.Tool(
        name="lx_launch_command",
        description="Build the command, arguments and environment that start lx-lsp",
        inputSchema={
            "type": "object",
            "properties": {
                "server_id": SERVER_ID_SCHEMA,
                "env": {
                    "type": "object",
                    "additionalProperties": {"type": "string"},
                    "description": "Project environment overrides",
                },
            },
            "required": ["server_id"],
        },
    ),
    types.Tool(
        name="lx_installation_status",
        description="Current installation status of a language server instance",
        inputSchema={
            "type": "object",
            "properties": {"server_id": SERVER_ID_SCHEMA},
            "required": ["server_id"],
        },
    ),
]

# Status and resolvers for this process
STATUS_BOARD = StatusBoard()
RESOLVERS: Dict[str, BinaryResolver] = {}


def _check_server_id(server_id: Any) -> str:
    if not isinstance(server_id, str) or not server_id:
        raise InvalidServerIdError(server_id)
    return server_id


def get_resolver(server_id: Any) -> BinaryResolver:
    """Get or create the resolver for a language server instance."""
    server_id = _check_server_id(server_id)

    resolver = RESOLVERS.get(server_id)
    if resolver is None:
        resolver = BinaryResolver(server_id, LoggingStatusSink(STATUS_BOARD))
        RESOLVERS[server_id] = resolver
    return resolver


async def handle_tool(name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Run a tool and return its JSON-serializable result."""
    server_id = arguments.get("server_id")

    if name == "lx_resolve_binary":
        path = await get_resolver(server_id).resolve()
        return {"success": True, "data": {"path": path}}

    elif name == "lx_launch_command":
        overrides: Optional[Dict[str, str]] = arguments.get("env")
        project_env = {**os.environ, **(overrides or {})}
        command = await launch_command(get_resolver(server_id), project_env)
        return {"success": True, "data": command.to_dict()}

    elif name == "lx_installation_status":
        status = STATUS_BOARD.current(_check_server_id(server_id))
        return {"success": True, "data": status.to_dict()}

    return {"success": False, "error": f"Unknown tool: {name}"}


async def init_server() -> Server:
    logger.info(f"Registered tools: {', '.join(t.name for t in tools)}")

    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        logger.debug("Tools requested")
        return tools

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> list[types.TextContent]:
        logger.debug(f"Tool call received: {name} with arguments {arguments}")
        try:
            result = await handle_tool(name, arguments or {})
        except ResolverError as e:
            log_error(e, {"tool": name}, logger)
            result = {"success": False, "error": str(e), "code": e.code}
        except Exception as e:
            log_error(e, {"tool": name}, logger)
            result = {"success": False, "error": str(e)}
        return [types.TextContent(type="text", text=json.dumps(result))]

    return server


async def serve() -> None:
    configure_logging()
    logger.info("Starting LX language server launcher")
    server = await init_server()
    async with stdio.stdio_server() as (read_stream, write_stream):
        init_options = InitializationOptions(
            server_name=SERVER_NAME,
            server_version=SERVER_VERSION,
            capabilities=types.ServerCapabilities(
                tools=types.ToolsCapability(listChanged=False),
                logging=types.LoggingCapability(),
            ),
        )
        await server.run(read_stream, write_stream, init_options)


def main() -> None:
    """Run the MCP server."""
    asyncio.run(serve())

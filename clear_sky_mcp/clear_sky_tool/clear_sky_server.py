"""
MCP Server for Clear Sky Tools

Exposes the clear sky observing tools via Model Context Protocol (MCP) over
stdio, for ADK agents or any other MCP client.

Logs go to stderr; stdout carries the MCP stream.
"""

import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

# MCP Server Imports
from mcp import types as mcp_types
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.models import InitializationOptions
import mcp.server.stdio

from .. import __version__
from .config import Settings
from .dispatcher import ToolDispatcher
from .tool_schema import TOOL_DECLARATIONS

logger = logging.getLogger(__name__)


class ToolCallError(Exception):
    """Raised from the call handler so the MCP server flags the result as an error."""


app = Server("clear-night-sky")
dispatcher: Optional[ToolDispatcher] = None


def get_dispatcher() -> ToolDispatcher:
    global dispatcher
    if dispatcher is None:
        dispatcher = ToolDispatcher()
    return dispatcher


@app.list_tools()
async def list_mcp_tools() -> List[mcp_types.Tool]:
    """
    MCP handler to list the clear sky tools.

    Returns:
        List of MCP Tool schemas built from the declared argument models
    """
    logger.info("Received list_tools request")
    return [
        mcp_types.Tool(
            name=declaration.name,
            description=declaration.description,
            inputSchema=declaration.input_schema(),
        )
        for declaration in TOOL_DECLARATIONS
    ]


# Arguments are validated by the dispatcher so that every bad field is reported at once
@app.call_tool(validate_input=False)
async def call_mcp_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[mcp_types.TextContent]:
    """
    MCP handler to execute a clear sky tool call.

    Args:
        name: Tool name to execute
        arguments: Raw arguments supplied by the caller

    Returns:
        A single text content item with the rendered result

    Raises:
        ToolCallError: Carrying the rendered failure text, for a flagged result
    """
    logger.info(f"Received call_tool request for '{name}' with arguments {arguments}")
    response = await get_dispatcher().dispatch(name, arguments)
    if response.is_error:
        raise ToolCallError(response.text)
    return [mcp_types.TextContent(type="text", text=response.text)]


async def run_mcp_stdio_server():
    """Runs the MCP server, listening for connections over standard input/output."""
    logger.info(f"Exposing {len(TOOL_DECLARATIONS)} tools via MCP protocol")

    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        logger.info("Starting handshake with client")
        await app.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name=app.name,
                server_version=__version__,
                capabilities=app.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )
        logger.info("Run loop finished or client disconnected")


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main():
    """Entry point for the Clear Night Sky MCP server."""
    settings = Settings.from_env()
    configure_logging(settings)

    global dispatcher
    dispatcher = ToolDispatcher(settings)

    logger.info("Launching Clear Night Sky MCP server via stdio")
    try:
        asyncio.run(run_mcp_stdio_server())
    except KeyboardInterrupt:
        logger.info("Clear Night Sky MCP server stopped by user")
    except Exception:
        logger.exception("Fatal error in Clear Night Sky MCP server")
        sys.exit(1)
    finally:
        logger.info("Clear Night Sky MCP server process exiting")


if __name__ == "__main__":
    main()

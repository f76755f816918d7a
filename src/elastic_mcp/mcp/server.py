"""
MCP server implementation for the Elasticsearch tools.

This module implements the Model Context Protocol server that exposes
index listing, mapping retrieval and search over stdio.
"""

import asyncio
import signal
import time
import uuid
from collections.abc import Callable

import mcp.server.stdio
from mcp import types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions

from elastic_mcp.core.interfaces import IDocumentStore
from elastic_mcp.mcp.container_context import ElasticMCPServerContext
from elastic_mcp.mcp.structured import error_to_content
from elastic_mcp.utils.config import ElasticMCPSettings, get_settings
from elastic_mcp.utils.logging import setup_logging

logger = setup_logging(__name__)


def create_mcp_server(
    settings: ElasticMCPSettings,
    store: IDocumentStore | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> tuple[Server, ElasticMCPServerContext]:
    """Create and configure the MCP server.

    Args:
        settings: Validated settings
        store: Optional backend override (tests inject a fake here)
        clock: Optional time source for the index list cache

    Returns:
        The configured server and the context owning its state
    """
    server = Server(settings.mcp_server_name)
    context = ElasticMCPServerContext(settings, store=store, clock=clock)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        """List available MCP tools from plugin registry."""
        tools = context.list_tools()
        logger.debug(f"list_tools returning {len(tools)} tools")
        return tools

    # Arguments are validated by the plugins so that violations come back as
    # regular "Error: ..." text instead of protocol errors.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: dict | None) -> list[types.TextContent]:
        """Handle tool execution requests via plugin registry."""
        corr = str(uuid.uuid4())
        logger.info(f"[corr={corr}] call_tool start: name={name}")
        try:
            results = await context.call_tool(name, arguments)
        except Exception as e:
            logger.error(f"[corr={corr}] Unexpected error in tool {name}: {e}")
            return error_to_content(e)

        logger.info(f"[corr={corr}] call_tool done: name={name}, items={len(results)}")
        return results

    return server, context


async def run_mcp_server(settings: ElasticMCPSettings | None = None) -> None:
    """Run the MCP server with stdio transport until stdin closes or a signal arrives."""
    settings = settings or get_settings()
    logger.info(f"🚀 Starting {settings.mcp_server_name} v{settings.mcp_server_version}")

    server, context = create_mcp_server(settings)
    shutdown = asyncio.Event()

    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, shutdown.set)
        except (NotImplementedError, RuntimeError):
            logger.debug(f"Signal handler for {signum} not supported on this platform")

    try:
        async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
            logger.info("📡 MCP server stdio streams established")
            serve = asyncio.create_task(
                server.run(
                    read_stream,
                    write_stream,
                    InitializationOptions(
                        server_name=settings.mcp_server_name,
                        server_version=settings.mcp_server_version,
                        capabilities=server.get_capabilities(
                            notification_options=NotificationOptions(),
                            experimental_capabilities={},
                        ),
                    ),
                )
            )
            stop = asyncio.create_task(shutdown.wait())
            done, _ = await asyncio.wait({serve, stop}, return_when=asyncio.FIRST_COMPLETED)

            if stop in done:
                logger.info("📡 Shutdown signal received, stopping server")
                serve.cancel()
                try:
                    await serve
                except asyncio.CancelledError:
                    pass
            else:
                stop.cancel()
                serve.result()
    finally:
        for signum in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.remove_signal_handler(signum)
            except (NotImplementedError, RuntimeError):
                pass
        await context.close()
        logger.info("🏁 MCP server shutdown complete")

#!/usr/bin/env python3
"""
MCP Server entry point with proper stdio handling.

This module provides a clean entry point for the MCP server that
ensures logging goes to stderr while MCP protocol uses stdout.
"""

import asyncio
import sys

from elastic_mcp.utils.config import ElasticMCPSettings, get_settings
from elastic_mcp.utils.logging import configure_root_logging, setup_logging

logger = setup_logging(__name__)


def setup_mcp_logging(settings: ElasticMCPSettings) -> None:
    """Setup logging for MCP server - logs to stderr only."""
    configure_root_logging(
        level=settings.log_level,
        structured=settings.log_structured,
        log_file=settings.get_log_file_path(),
    )


async def main(settings: ElasticMCPSettings | None = None) -> None:
    """Main entry point for MCP server."""
    try:
        settings = settings or get_settings()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)

    setup_mcp_logging(settings)

    # Import server after logging is configured to avoid duplicate handlers
    from elastic_mcp.mcp.server import run_mcp_server

    try:
        await run_mcp_server(settings)
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


def main_sync():
    """Synchronous entry point for scripts."""
    asyncio.run(main())


if __name__ == "__main__":
    main_sync()

"""
Container-aware MCP server context.

One context owns everything a server instance needs: the service container,
the backend adapter, the index list cache and the plugin registry. Several
contexts can live in one process without sharing state.
"""

import time
from collections.abc import Callable
from typing import Any

from mcp import types

from elastic_mcp.core.container import ServiceContainer
from elastic_mcp.core.interfaces import IDocumentStore
from elastic_mcp.mcp.cache import IndexListCache
from elastic_mcp.mcp.plugins.registry import PluginRegistry
from elastic_mcp.mcp.plugins.tools import get_builtin_plugins
from elastic_mcp.utils.config import ElasticMCPSettings
from elastic_mcp.utils.logging import setup_logging

logger = setup_logging(__name__)


class ElasticMCPServerContext:
    """MCP server context that wires services through the dependency injection container."""

    def __init__(
        self,
        settings: ElasticMCPSettings,
        store: IDocumentStore | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the server context.

        Args:
            settings: Validated application settings
            store: Backend override; an Elasticsearch client is built from settings otherwise
            clock: Time source for the index list cache
        """
        logger.info(f"Initializing MCP server context for {settings.url}")
        self.settings = settings

        self.container = ServiceContainer(settings)
        if store is not None:
            self.container.register_instance(IDocumentStore, store)
        else:
            from elastic_mcp.services.elasticsearch import ElasticsearchDocumentStore

            self.container.register(IDocumentStore, lambda: ElasticsearchDocumentStore.from_settings(settings))

        self.index_cache = IndexListCache(
            self.container.get(IDocumentStore),
            ttl_seconds=settings.index_cache_ttl,
            clock=clock,
        )
        self.container.register_instance(IndexListCache, self.index_cache)

        self.registry = PluginRegistry(self.container)
        for plugin_class in get_builtin_plugins():
            self.registry.register_plugin_class(plugin_class)

        logger.info(f"MCP server context ready with tools: {self.registry.list_plugins()}")

    @property
    def store(self) -> IDocumentStore:
        return self.container.get(IDocumentStore)

    def list_tools(self) -> list[types.Tool]:
        return self.registry.get_tool_definitions()

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        return await self.registry.execute_tool(name, arguments)

    async def close(self) -> None:
        """Close the backend connection and release container services."""
        await self.container.dispose()

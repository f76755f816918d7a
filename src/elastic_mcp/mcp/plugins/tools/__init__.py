"""
Built-in MCP Tool Plugins.
"""

from elastic_mcp.mcp.plugins.base import MCPToolPlugin

from .get_mappings import GetMappingsPlugin
from .list_indices import ListIndicesPlugin
from .search import SearchPlugin


def get_builtin_plugins() -> list[type[MCPToolPlugin]]:
    """Get all built-in plugin classes."""
    return [
        ListIndicesPlugin,
        GetMappingsPlugin,
        SearchPlugin,
    ]


__all__ = [
    "get_builtin_plugins",
    "GetMappingsPlugin",
    "ListIndicesPlugin",
    "SearchPlugin",
]

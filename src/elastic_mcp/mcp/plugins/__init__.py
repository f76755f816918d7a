"""
MCP Tool Plugin Architecture.

This module provides the plugin system for MCP tools: each tool is a plugin
with a declared input schema, held and dispatched by the registry.
"""

from .base import IndexPlugin, MCPToolPlugin, PluginMetadata
from .registry import PluginRegistry
from .tools import get_builtin_plugins

__all__ = [
    "IndexPlugin",
    "MCPToolPlugin",
    "PluginMetadata",
    "PluginRegistry",
    "get_builtin_plugins",
]

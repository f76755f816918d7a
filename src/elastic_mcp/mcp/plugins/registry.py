"""
Plugin Registry for MCP Tool Plugins.

This module provides the central registry for managing MCP tool plugins,
including registration, validation, and dispatch of tool calls.
"""

from typing import Any, Dict, List, Optional, Type

from mcp import types

from elastic_mcp.mcp.plugins.base import MCPToolPlugin
from elastic_mcp.mcp.structured.formatters import error_to_content
from elastic_mcp.utils.errors import PluginError, ToolExecutionError, ValidationError
from elastic_mcp.utils.logging import setup_logging

logger = setup_logging(__name__)


class PluginRegistry:
    """Central registry for MCP tool plugins."""

    def __init__(self, container=None):
        """Initialize the plugin registry.

        Args:
            container: Optional service container for dependency injection
        """
        self.container = container
        self._plugins: Dict[str, MCPToolPlugin] = {}

        logger.info("Plugin registry initialized")

    def register_plugin_class(self, plugin_class: Type[MCPToolPlugin]) -> bool:
        """Instantiate a plugin class with the registry's container and register it."""
        try:
            return self.register_plugin_instance(plugin_class(self.container))
        except Exception as e:
            logger.error(f"Failed to register plugin class {plugin_class.__name__}: {e}")
            return False

    def register_plugin_instance(self, plugin: MCPToolPlugin) -> bool:
        """Register a plugin instance directly.

        Returns:
            True if registration successful, False otherwise
        """
        if not plugin.validate():
            logger.error(f"Plugin {plugin!r} failed validation")
            return False

        if plugin.name in self._plugins:
            logger.warning(f"Plugin {plugin.name} already registered, overwriting")

        self._plugins[plugin.name] = plugin
        logger.info(f"Registered plugin: {plugin.name}")
        return True

    def unregister_plugin(self, plugin_name: str) -> bool:
        """Remove a plugin; returns False when it was not registered."""
        if self._plugins.pop(plugin_name, None) is None:
            return False
        logger.info(f"Unregistered plugin: {plugin_name}")
        return True

    def get_plugin(self, plugin_name: str) -> Optional[MCPToolPlugin]:
        return self._plugins.get(plugin_name)

    def list_plugins(self) -> List[str]:
        return sorted(self._plugins)

    def get_tool_definitions(self) -> List[types.Tool]:
        """Get MCP tool definitions for all registered plugins."""
        tools = []

        for plugin_name, plugin in self._plugins.items():
            try:
                tools.append(plugin.get_tool_definition())
            except Exception as e:
                logger.error(f"Failed to get tool definition for {plugin_name}: {e}")

        return tools

    async def execute_tool(self, tool_name: str, arguments: Dict[str, Any] | None) -> List[types.TextContent]:
        """Execute a tool by name.

        Never raises: unknown tools, argument violations and unexpected
        plugin failures all come back as a single ``Error: ...`` fragment.
        """
        arguments = arguments or {}

        plugin = self.get_plugin(tool_name)
        if plugin is None:
            error = PluginError(f"Unknown tool: {tool_name}")
            logger.error(f"Tool call rejected: {error}")
            return error_to_content(error)

        try:
            plugin.validate_arguments(arguments)
        except ValidationError as e:
            logger.error(f"Invalid arguments for tool {tool_name}: {e}")
            return error_to_content(e)

        if not plugin.check_dependencies():
            error = PluginError(f"Tool '{tool_name}' dependencies not satisfied")
            logger.error(str(error))
            return error_to_content(error)

        try:
            result = await plugin.execute(arguments)
        except Exception as e:
            logger.error(f"Tool {tool_name} execution failed: {e}")
            return error_to_content(ToolExecutionError(f"Tool '{tool_name}' execution failed: {e}"))

        logger.debug(f"Tool {tool_name} executed successfully")
        return result

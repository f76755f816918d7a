"""
Base classes for the Elasticsearch MCP tools.

A tool is a plugin declaring a name, a description and a JSON schema for its
arguments. The registry checks arguments against that schema before calling
``execute``, and resolves backend services through the service container.
"""

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from jsonschema import Draft7Validator
from mcp import types

from elastic_mcp.core.interfaces import IDocumentStore
from elastic_mcp.utils.errors import PluginError, ValidationError
from elastic_mcp.utils.logging import setup_logging

logger = setup_logging(__name__)


@dataclass
class PluginMetadata:
    """Metadata for MCP tool plugins."""

    name: str
    version: str
    description: str
    tags: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert metadata to dictionary."""
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "tags": self.tags or [],
        }


class MCPToolPlugin(ABC):
    """A single MCP tool.

    Subclasses provide ``name``, ``description``, ``input_schema`` and
    ``execute``; everything the registry needs is derived from those.
    """

    def __init__(self, container=None):
        """
        Args:
            container: Service container the plugin resolves its backends from
        """
        self.container = container
        self._metadata: PluginMetadata | None = None
        self._validator: Draft7Validator | None = None
        self._validated = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the unique name of this plugin."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Get a human-readable description of this plugin."""
        pass

    @property
    @abstractmethod
    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the tool arguments."""
        pass

    @property
    def version(self) -> str:
        """Get the version of this plugin."""
        return "1.0.0"

    @property
    def tags(self) -> list[str]:
        return []

    @property
    def metadata(self) -> PluginMetadata:
        """Get plugin metadata."""
        if self._metadata is None:
            self._metadata = PluginMetadata(
                name=self.name,
                version=self.version,
                description=self.description,
                tags=self.tags,
            )
        return self._metadata

    def get_tool_definition(self) -> types.Tool:
        """Get the MCP tool definition for this plugin."""
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )

    def validate_arguments(self, arguments: dict[str, Any]) -> None:
        """Check arguments against the declared input schema.

        Raises:
            ValidationError: On the first schema violation found
        """
        if self._validator is None:
            self._validator = Draft7Validator(self.input_schema)

        errors = sorted(self._validator.iter_errors(arguments), key=lambda e: list(e.absolute_path))
        if errors:
            first = errors[0]
            field = ".".join(str(part) for part in first.absolute_path)
            message = f"Invalid argument '{field}': {first.message}" if field else f"Invalid arguments: {first.message}"
            raise ValidationError(message, context={"tool": self.name, "violations": len(errors)})

    @abstractmethod
    async def execute(self, arguments: dict[str, Any]) -> list[types.TextContent]:
        """Execute the plugin with the given arguments.

        Implementations convert their own failures into an error fragment
        instead of raising.
        """
        pass

    def validate(self) -> bool:
        """Validate that the plugin is properly configured."""
        try:
            if not self.name or not isinstance(self.name, str):
                logger.error(f"Plugin {self.__class__.__name__} has invalid name")
                return False

            if not self.description or not isinstance(self.description, str):
                logger.error(f"Plugin {self.name} has invalid description")
                return False

            Draft7Validator.check_schema(self.input_schema)

            sig = inspect.signature(self.execute)
            if len(sig.parameters) != 1:
                logger.error(f"Plugin {self.name} execute method has wrong signature")
                return False

            self._validated = True
            logger.debug(f"Plugin {self.name} validation passed")
            return True

        except Exception as e:
            logger.error(f"Plugin {self.name} validation failed: {e}")
            return False

    @property
    def is_validated(self) -> bool:
        """Check if plugin has been validated."""
        return self._validated

    def get_required_services(self) -> list[type]:
        """Get list of service interfaces required by this plugin."""
        return []

    def check_dependencies(self) -> bool:
        """Check if all plugin dependencies are available."""
        if not self.container:
            return not self.get_required_services()

        missing = [svc.__name__ for svc in self.get_required_services() if not self.container.has(svc)]
        if missing:
            logger.warning(f"Plugin {self.name} missing required services: {missing}")
            return False
        return True

    def get_service(self, interface: type) -> Any:
        """Resolve a required service from the container."""
        if not self.container:
            raise PluginError("Service container not available")
        return self.container.get(interface)

    def __repr__(self) -> str:
        """String representation of the plugin."""
        return f"<{self.__class__.__name__}: {self.name} v{self.version}>"


class IndexPlugin(MCPToolPlugin):
    """Base class for plugins that talk to the Elasticsearch backend."""

    @property
    def tags(self) -> list[str]:
        """Default tags for index plugins."""
        return ["elasticsearch", "index"]

    def get_required_services(self) -> list[type]:
        return [IDocumentStore]

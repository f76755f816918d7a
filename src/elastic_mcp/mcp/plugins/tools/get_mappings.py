"""
Get Mappings Plugin for MCP Tools.

Returns the field mappings of one index, straight from the backend.
"""

from typing import Any

from mcp import types

from elastic_mcp.core.interfaces import IDocumentStore
from elastic_mcp.mcp.plugins.base import IndexPlugin
from elastic_mcp.mcp.structured import error_to_content, mappings_to_content
from elastic_mcp.utils.errors import ValidationError, describe_error
from elastic_mcp.utils.logging import setup_logging

logger = setup_logging(__name__)


class GetMappingsPlugin(IndexPlugin):
    """Plugin for reading the field mappings of an index."""

    @property
    def name(self) -> str:
        return "get_mappings"

    @property
    def description(self) -> str:
        return "Get field mappings for a specific Elasticsearch index"

    @property
    def tags(self) -> list[str]:
        return ["elasticsearch", "index", "schema"]

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "index": {
                    "type": "string",
                    "minLength": 1,
                    "description": "Name of the Elasticsearch index to get mappings for",
                },
            },
            "required": ["index"],
        }

    async def execute(self, arguments: dict[str, Any]) -> list[types.TextContent]:
        """Execute mapping retrieval."""
        index = str(arguments.get("index") or "").strip()
        if not index:
            error = ValidationError("Index name is required")
            logger.error(f"Failed to get mappings: {error}")
            return error_to_content(error)

        try:
            store: IDocumentStore = self.get_service(IDocumentStore)
            mapping_response = await store.get_mapping(index)
        except Exception as e:
            logger.error(f"Failed to get mappings: {describe_error(e).message}")
            return error_to_content(e)

        return mappings_to_content(index, mapping_response)

"""
List Indices Plugin for MCP Tools.

Lists the cluster's indices with health, status and document count. The
list is served from the server's ``IndexListCache`` while it is fresh.
"""

from typing import Any

from mcp import types

from elastic_mcp.mcp.cache import IndexListCache
from elastic_mcp.mcp.plugins.base import IndexPlugin
from elastic_mcp.mcp.structured import error_to_content, index_list_to_content
from elastic_mcp.utils.errors import describe_error
from elastic_mcp.utils.logging import setup_logging

logger = setup_logging(__name__)


class ListIndicesPlugin(IndexPlugin):
    """Plugin for listing available Elasticsearch indices."""

    @property
    def name(self) -> str:
        return "list_indices"

    @property
    def description(self) -> str:
        return "List all available Elasticsearch indices (cached)"

    @property
    def tags(self) -> list[str]:
        return ["elasticsearch", "index", "catalog"]

    @property
    def input_schema(self) -> dict[str, Any]:
        return {"type": "object", "properties": {}}

    def get_required_services(self) -> list[type]:
        return [IndexListCache]

    async def execute(self, arguments: dict[str, Any]) -> list[types.TextContent]:
        """Execute index listing."""
        try:
            cache: IndexListCache = self.get_service(IndexListCache)
            indices, cached = await cache.get_indices()
        except Exception as e:
            logger.error(f"Failed to list indices: {describe_error(e).message}")
            return error_to_content(e)

        logger.debug(f"Index list cache stats: {cache.get_stats()}")
        return index_list_to_content(indices, cached)

"""
Search Plugin for MCP Tools.

Runs a caller-supplied query DSL document against an explicitly named index.
The document is treated as opaque: it is only checked for JSON
serializability, never interpreted.
"""

import json
from collections.abc import Mapping
from typing import Any

from mcp import types

from elastic_mcp.core.interfaces import IDocumentStore
from elastic_mcp.mcp.plugins.base import IndexPlugin
from elastic_mcp.mcp.structured import error_to_content, normalize_search_response
from elastic_mcp.utils.errors import ValidationError, describe_error
from elastic_mcp.utils.logging import setup_logging

logger = setup_logging(__name__)

HIGHLIGHT_ALL_FIELDS = {"fields": {"*": {}}}


def check_query_body(query_body: Any) -> dict[str, Any]:
    """Return the query body as a dict if it survives a JSON round-trip.

    Raises:
        ValidationError: If the body is not a mapping or cannot be serialized
    """
    if not isinstance(query_body, Mapping):
        raise ValidationError("queryBody must be a valid Elasticsearch query DSL object")
    try:
        json.loads(json.dumps(query_body))
    except (TypeError, ValueError, RecursionError) as e:
        raise ValidationError(f"queryBody must be a valid Elasticsearch query DSL object ({e})") from e
    return dict(query_body)


def build_search_body(query_body: Mapping[str, Any]) -> dict[str, Any]:
    """Build the request body sent to the backend.

    Any ``index`` key in the caller's body is dropped so the explicit index
    argument always decides the target. Highlighting on every field is
    requested unless the caller asked for something else.
    """
    body = {key: value for key, value in query_body.items() if key != "index"}
    body.setdefault("highlight", HIGHLIGHT_ALL_FIELDS)
    return body


class SearchPlugin(IndexPlugin):
    """Plugin for query DSL search on a single index."""

    @property
    def name(self) -> str:
        return "search"

    @property
    def description(self) -> str:
        return (
            "Perform Elasticsearch search on a specified index. "
            "User must provide exact index name explicitly."
        )

    @property
    def tags(self) -> list[str]:
        return ["elasticsearch", "search", "query"]

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "index": {
                    "type": "string",
                    "minLength": 1,
                    "description": "Explicit Elasticsearch index name",
                },
                "queryBody": {
                    "type": "object",
                    "description": "Elasticsearch query DSL object.",
                },
            },
            "required": ["index", "queryBody"],
        }

    async def execute(self, arguments: dict[str, Any]) -> list[types.TextContent]:
        """Execute search."""
        index = str(arguments.get("index") or "").strip()
        try:
            if not index:
                raise ValidationError("Exact index name is required.")
            query_body = check_query_body(arguments.get("queryBody"))
        except ValidationError as e:
            logger.error(f"Search rejected: {e}")
            return error_to_content(e)

        try:
            store: IDocumentStore = self.get_service(IDocumentStore)
            raw_result = await store.search(index, build_search_body(query_body))
            return normalize_search_response(raw_result, query_body.get("from"))
        except Exception as e:
            logger.error(f"Search failed: {describe_error(e).message}")
            return error_to_content(e)

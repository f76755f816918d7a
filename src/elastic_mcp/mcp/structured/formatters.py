"""
Helpers to convert backend responses into MCP text content.

Every tool answers with a list of ``TextContent`` fragments, including
failures, which become a single ``Error: ...`` fragment.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from mcp import types

from elastic_mcp.utils.errors import BackendError, describe_error

from .models import IndexSummary

JSON_INDENT = 2


def text(value: str) -> types.TextContent:
    return types.TextContent(type="text", text=value)


def to_json(value: Any) -> str:
    return json.dumps(value, indent=JSON_INDENT, ensure_ascii=False)


def error_to_content(error: BaseException) -> list[types.TextContent]:
    """Render any failure as the single-fragment error result."""
    detail = describe_error(error)
    return [text(f"Error: {detail.message}")]


def index_list_to_content(indices: Sequence[IndexSummary], cached: bool) -> list[types.TextContent]:
    summary = f"Found {len(indices)} indices"
    if cached:
        summary += " (cached)"
    return [
        text(summary),
        text(to_json([entry.to_json_dict() for entry in indices])),
    ]


def mappings_to_content(index: str, mapping_response: Mapping[str, Any] | None) -> list[types.TextContent]:
    """Format a mapping response; an index without mapping data renders as ``{}``."""
    index_entry = (mapping_response or {}).get(index) or {}
    mappings = index_entry.get("mappings") if isinstance(index_entry, Mapping) else None
    return [
        text(f"Mappings for index: {index}"),
        text(f"Mappings for index {index}: {to_json(mappings or {})}"),
    ]


def extract_total(hits: Mapping[str, Any]) -> int:
    """Read the total hit count, given either as an integer or as ``{"value": n}``."""
    total = hits.get("total")
    if isinstance(total, bool):
        return 0
    if isinstance(total, int):
        return total
    if isinstance(total, Mapping):
        value = total.get("value")
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return 0


def normalize_search_response(raw_result: Mapping[str, Any], requested_from: Any = 0) -> list[types.TextContent]:
    """Turn a raw search response into ``[metadata, hit_1, ..., hit_n]``.

    Args:
        raw_result: Search response body as returned by the backend
        requested_from: Pagination offset the caller asked for

    Raises:
        BackendError: If the response carries no hit list
    """
    hits = raw_result.get("hits")
    if not isinstance(hits, Mapping):
        raise BackendError("Malformed search response: missing 'hits'")

    hit_list = hits.get("hits", [])
    if not isinstance(hit_list, list):
        raise BackendError("Malformed search response: 'hits.hits' is not a list")

    fragments = [text(to_json(hit.get("_source") or {})) for hit in hit_list]

    offset = requested_from or 0
    metadata = text(
        f"Total results: {extract_total(hits)}, showing {len(hit_list)} from position {offset}"
    )
    return [metadata, *fragments]

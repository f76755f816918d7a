"""
Structured output helpers for MCP tools.
"""

from .formatters import (
    error_to_content,
    extract_total,
    index_list_to_content,
    mappings_to_content,
    normalize_search_response,
)
from .models import IndexSummary

__all__ = [
    "IndexSummary",
    "error_to_content",
    "extract_total",
    "index_list_to_content",
    "mappings_to_content",
    "normalize_search_response",
]

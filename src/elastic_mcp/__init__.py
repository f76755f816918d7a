"""
Elastic MCP - Model Context Protocol server for Elasticsearch.

This package provides:
- Index listing with a time-expiring cache
- Field mapping retrieval per index
- Query DSL search with normalized, text-based results
- MCP stdio server wiring for desktop assistants
"""

__version__ = "0.1.1"

"""
MCP server, tool plugins and the index list cache.
"""

"""
Backend services used by the MCP tools.
"""

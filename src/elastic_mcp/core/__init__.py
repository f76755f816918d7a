"""
Core infrastructure for the Elasticsearch MCP server.

This package contains the service container and the interfaces the
tool plugins depend on.
"""

from .container import ServiceContainer
from .interfaces import IDocumentStore

__all__ = [
    "IDocumentStore",
    "ServiceContainer",
]

"""
Service interfaces for dependency injection and modularity.

This module defines abstract base classes for the services the MCP tools
depend on, enabling loose coupling and easier testing.
"""

from abc import ABC, abstractmethod
from typing import Any


class IDocumentStore(ABC):
    """Abstract interface for the search backend the tools call through to."""

    @abstractmethod
    async def list_indices(self) -> list[dict[str, Any]]:
        """Return the raw index catalog, one mapping per index."""
        pass

    @abstractmethod
    async def get_mapping(self, index: str) -> dict[str, Any]:
        """Return the mapping response keyed by index name."""
        pass

    @abstractmethod
    async def search(self, index: str, body: dict[str, Any]) -> dict[str, Any]:
        """Execute a query DSL document against an index and return the raw response."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying connection."""
        pass

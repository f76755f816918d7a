"""
Dependency injection container for the Elasticsearch MCP server.

This module provides a service container that manages dependencies and service lifecycle,
enabling loose coupling and better testability.
"""

import inspect
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from elastic_mcp.utils.config import ElasticMCPSettings
from elastic_mcp.utils.errors import ConfigurationError
from elastic_mcp.utils.logging import setup_logging

logger = setup_logging(__name__)

T = TypeVar('T')


class ServiceRegistration:
    """Represents a service registration in the container."""

    def __init__(
        self,
        interface: Type,
        factory: Callable[[], Any],
        singleton: bool = True
    ):
        self.interface = interface
        self.factory = factory
        self.singleton = singleton


class ServiceContainer:
    """Dependency injection container for managing services and their dependencies."""

    def __init__(self, settings: ElasticMCPSettings | None = None):
        """Initialize the service container.

        Args:
            settings: Application settings
        """
        self.settings = settings
        self._singletons: Dict[Type, Any] = {}
        self._registrations: Dict[Type, ServiceRegistration] = {}
        self._building: set = set()  # Track services being built to prevent cycles

    def register(
        self,
        interface: Type[T],
        factory: Callable[[], T],
        singleton: bool = True
    ) -> None:
        """Register a factory for a service.

        Args:
            interface: The interface/abstract class
            factory: Callable building the concrete implementation
            singleton: Whether to treat as singleton
        """
        logger.debug(f"Registering factory for {interface.__name__}")
        self._registrations[interface] = ServiceRegistration(interface, factory, singleton)

    def register_instance(self, interface: Type[T], instance: T) -> None:
        """Register an existing instance.

        Args:
            interface: The interface/abstract class
            instance: The instance to register
        """
        logger.debug(f"Registering instance for {interface.__name__}")
        self._singletons[interface] = instance

    def has(self, interface: Type) -> bool:
        """Check whether a service can be resolved."""
        return interface in self._singletons or interface in self._registrations

    def get(self, interface: Type[T]) -> T:
        """Get a service instance.

        Raises:
            ConfigurationError: If service is not registered or circular dependency detected
        """
        if interface in self._building:
            raise ConfigurationError(f"Circular dependency detected for {interface.__name__}")

        if interface in self._singletons:
            return self._singletons[interface]

        registration = self._registrations.get(interface)
        if registration is None:
            raise ConfigurationError(f"Service {interface.__name__} is not registered")

        self._building.add(interface)
        try:
            instance = registration.factory()
            if registration.singleton:
                self._singletons[interface] = instance
            logger.debug(f"Created instance of {interface.__name__}")
            return instance
        finally:
            self._building.discard(interface)

    def get_service_info(self) -> Dict[str, Any]:
        """Get information about registered services."""
        names = {svc.__name__ for svc in self._registrations} | {svc.__name__ for svc in self._singletons}
        return {
            "registered_services": sorted(names),
            "singleton_instances": len(self._singletons),
        }

    async def dispose(self) -> None:
        """Close singleton services that expose ``close`` and forget all registrations."""
        logger.info("Disposing service container")

        for interface, instance in self._singletons.items():
            close: Optional[Callable[[], Any]] = getattr(instance, "close", None)
            if close is None:
                continue
            try:
                result = close()
                if inspect.isawaitable(result):
                    await result
                logger.debug(f"Closed service {interface.__name__}")
            except Exception as e:
                logger.error(f"Error closing service {interface.__name__}: {e}")

        self._singletons.clear()
        self._registrations.clear()
        self._building.clear()

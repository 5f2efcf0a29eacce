"""Mini README: Registry mapping provider identifiers to implementations.

Structure:
    * RoutingProviderRegistry - registration and instantiation of
      ``RoutingProvider`` subclasses.
    * REGISTRY - process-wide instance the built-in providers register with.

Hosts look providers up by name (``"osrm"``, ``"straight_line"``) so the
choice can come from settings or a request body.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Type

from ..logging_utils import get_logger
from .base import RoutingProvider

LOGGER = get_logger(__name__)


class RoutingProviderRegistry:
    """Simple registry for mapping provider identifiers to classes."""

    def __init__(self) -> None:
        self._providers: Dict[str, Type[RoutingProvider]] = {}

    def register(self, provider: Type[RoutingProvider]) -> Type[RoutingProvider]:
        """Register a provider class; usable as a class decorator."""

        identifier = provider.provider_name.lower()
        LOGGER.debug("Registering routing provider '%s'", identifier)
        self._providers[identifier] = provider
        return provider

    def available_providers(self) -> Iterable[str]:
        """Return provider identifiers in alphabetical order."""

        return sorted(self._providers.keys())

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and identifier.lower() in self._providers

    def create(self, identifier: str, **options: Any) -> RoutingProvider:
        """Instantiate the provider matching ``identifier``."""

        provider_cls = self._providers.get(identifier.lower())
        if not provider_cls:
            raise KeyError(f"Unknown routing provider '{identifier}'")
        LOGGER.info("Creating routing provider '%s'", identifier)
        return provider_cls(**options)


REGISTRY = RoutingProviderRegistry()

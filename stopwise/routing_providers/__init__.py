"""Mini README: Routing provider subsystem.

Re-exports the provider interface, the registry and the built-in
implementations. ``base`` defines the async leg contract, ``registry`` maps
names to classes and ``providers`` holds the concrete backends.
"""

from .base import RoutingProvider
from .registry import REGISTRY, RoutingProviderRegistry
from . import providers  # noqa: F401  # ensure built-in providers register on import
from .providers import OSRMProvider, StraightLineProvider

__all__ = [
    "OSRMProvider",
    "REGISTRY",
    "RoutingProvider",
    "RoutingProviderRegistry",
    "StraightLineProvider",
]

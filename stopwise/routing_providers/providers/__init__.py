"""Mini README: Built-in routing provider implementations.

Importing this package registers every provider with ``REGISTRY``. New
providers subclass ``RoutingProvider`` and decorate the class with
``REGISTRY.register`` so hosts can create them by name.
"""

from .osrm import OSRMProvider
from .straight_line import StraightLineProvider

__all__ = ["OSRMProvider", "StraightLineProvider"]

"""Mini README: Core package initializer for Stopwise.

Stopwise orders a set of stops into a short visiting route and prices it
with a routing provider. The heavy lifting lives in ``stopwise.sequencing``;
this initializer keeps imports light and only exposes the logging helper
every module shares.
"""

from .logging_utils import get_logger

__version__ = "0.1.0"

__all__ = ["__version__", "get_logger"]

"""Mini README: Host interfaces for Stopwise.

Exports the FastAPI application factory serving the sequencing engine over
HTTP. The Typer CLI lives in ``main_route_service.py`` at the repository
root and reuses the same factory for ``serve``.
"""

from .web_app import create_application

__all__ = ["create_application"]

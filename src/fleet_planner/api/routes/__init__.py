"""Route group exports."""

from . import health, routes, sites

__all__ = ["health", "routes", "sites"]

"""Export services."""

from .geojson import generate_route_color, routes_to_geojson

__all__ = [
    "generate_route_color",
    "routes_to_geojson",
]

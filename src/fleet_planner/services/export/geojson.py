"""GeoJSON export of optimized vehicle routes for the map layer."""

from __future__ import annotations

from typing import Any, Dict, List

from shapely.geometry import LineString, Point, mapping

from ...models.domain import Coordinate
from ..routing.models import FleetSolution


def generate_route_color(index: int) -> str:
    """Generate distinct colors for vehicle routes."""
    colors = [
        "#3b82f6", "#ef4444", "#10b981", "#f59e0b", "#8b5cf6",
        "#ec4899", "#14b8a6", "#f97316", "#6366f1", "#84cc16",
    ]
    return colors[index % len(colors)]


def route_geometry(points: List[Coordinate]) -> LineString:
    # GeoJSON uses lon,lat order (x,y)
    return LineString([(point.longitude, point.latitude) for point in points])


def routes_to_geojson(solution: FleetSolution, depot: Coordinate | None = None) -> Dict[str, Any]:
    """Build a FeatureCollection with one LineString per vehicle (plus the depot point)."""

    features: List[Dict[str, Any]] = []
    for index, route in enumerate(solution.routes):
        features.append(
            {
                "type": "Feature",
                "geometry": mapping(route_geometry(route.route)),
                "properties": {
                    "vehicle_id": route.vehicle_id,
                    "distance_km": round(route.distance_km, 3),
                    "stop_count": route.stop_count,
                    "site_ids": list(route.site_ids),
                    "color": generate_route_color(index),
                },
            }
        )

    if depot is not None:
        features.append(
            {
                "type": "Feature",
                "geometry": mapping(Point(depot.longitude, depot.latitude)),
                "properties": {"role": "depot"},
            }
        )

    return {
        "type": "FeatureCollection",
        "features": features,
        "properties": {"total_distance_km": round(solution.total_distance_km, 3)},
    }

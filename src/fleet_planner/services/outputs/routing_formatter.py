"""Serializers for routing outputs."""

from __future__ import annotations

import csv
import io

from ..routing.models import FleetSolution, RouteCandidate


def route_to_json(route: RouteCandidate) -> dict:
    return {
        "vehicle_id": route.vehicle_id,
        "route": [{"lat": point.latitude, "lng": point.longitude} for point in route.route],
        "distance_km": route.distance_km,
        "generation": route.generation,
        "site_ids": list(route.site_ids),
    }


def solution_to_json(solution: FleetSolution) -> dict:
    return {
        "total_distance_km": solution.total_distance_km,
        "routes": [route_to_json(route) for route in solution.routes],
    }


def solution_to_csv(solution: FleetSolution) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "vehicle_id",
        "sequence",
        "latitude",
        "longitude",
        "route_distance_km",
        "stop_count",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for route in solution.routes:
        for sequence, point in enumerate(route.route):
            writer.writerow(
                {
                    "vehicle_id": route.vehicle_id,
                    "sequence": sequence,
                    "latitude": point.latitude,
                    "longitude": point.longitude,
                    "route_distance_km": route.distance_km,
                    "stop_count": route.stop_count,
                }
            )
    return buffer.getvalue()

"""2-opt local search with fixed depot endpoints."""

from __future__ import annotations

from typing import Sequence

from ...config import settings
from ...models.domain import Coordinate
from ..geospatial import route_length

DEFAULT_MAX_ITERATIONS = 50


def two_opt(
    route: Sequence[Coordinate],
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    epsilon_km: float | None = None,
) -> list[Coordinate]:
    """Improve a tour by reversing interior segments (first improvement).

    A reversal is accepted only if it shortens the tour by more than
    ``epsilon_km``; the scan then restarts. Stops after a scan without
    improvement or after ``max_iterations`` scans. Tours of three points or
    fewer are returned as-is.
    """
    if len(route) <= 3:
        return list(route)

    epsilon_km = settings.two_opt_epsilon_km if epsilon_km is None else epsilon_km
    best_route = list(route)
    last = len(best_route) - 1
    improved = True
    iterations = 0

    while improved and iterations < max_iterations:
        improved = False
        iterations += 1
        best_distance = route_length(best_route)

        for i in range(1, last - 1):
            for j in range(i + 1, last):
                candidate = best_route[:i] + best_route[i : j + 1][::-1] + best_route[j + 1 :]
                if route_length(candidate) < best_distance - epsilon_km:
                    best_route = candidate
                    improved = True
                    break
            if improved:
                break

    best_route[-1] = best_route[0]
    return best_route

"""Synchronous multi-vehicle route optimizer.

Builds a small population of full-fleet solutions (greedy construction plus
2-opt), returns the best one together with the next-best alternatives so the
dashboard can show candidates that were not selected.
"""

from __future__ import annotations

import logging
import random
from typing import Sequence

from ...config import settings
from ...models.domain import Coordinate, Site
from ..geospatial import distance, route_length
from ..tasks import consolidate_sites, select_priority_sites
from .clustering import cluster_sites
from .construction import RandomSource, build_route, vehicle_label
from .models import FleetSolution, OptimizationResult, RouteCandidate
from .stages import member_randomness
from .two_opt import two_opt

logger = logging.getLogger(__name__)


def prepare_clusters(
    sites: Sequence[Site],
    vehicle_count: int,
    weekly_capacity: int | None = None,
) -> list[list[Site]]:
    """Consolidate, prioritise and cluster the raw site list."""

    consolidated = consolidate_sites(sites)
    logger.info(f"Found {len(consolidated)} sites with pending tasks out of {len(sites)}")
    selected = select_priority_sites(consolidated, weekly_capacity)
    return cluster_sites(selected, vehicle_count)


def build_solution(
    depot: Coordinate,
    clusters: Sequence[Sequence[Site]],
    *,
    randomness: float,
    rng: RandomSource,
    two_opt_budget: int | None = None,
    generation: int = 0,
) -> FleetSolution:
    """Construct one route per non-empty cluster; refine with 2-opt when a budget is given."""

    routes: list[RouteCandidate] = []
    for cluster_index, cluster in enumerate(clusters):
        if not cluster:
            continue
        points = build_route(depot, cluster, randomness, rng)
        if two_opt_budget is not None:
            points = two_opt(points, max_iterations=two_opt_budget)
        routes.append(
            RouteCandidate(
                vehicle_id=vehicle_label(cluster_index),
                route=points,
                distance_km=route_length(points),
                generation=generation,
                site_ids=[site.site_id for site in cluster],
            )
        )
    return FleetSolution(routes=routes)


def baseline_distance_km(depot: Coordinate, clusters: Sequence[Sequence[Site]]) -> float:
    """Distance if every site were served by its own depot round trip."""

    return sum(2 * distance(depot, site.location) for cluster in clusters for site in cluster)


def optimize_routes_with_alternatives(
    sites: Sequence[Site],
    depot: Coordinate,
    vehicle_count: int | None = None,
    *,
    weekly_capacity: int | None = None,
    rng: RandomSource | None = None,
    population_size: int | None = None,
    two_opt_budget: int | None = None,
    max_alternatives: int | None = None,
) -> OptimizationResult:
    vehicle_count = settings.default_vehicle_count if vehicle_count is None else vehicle_count
    population_size = settings.alternative_population_size if population_size is None else population_size
    if population_size < 1:
        raise ValueError("population_size must be >= 1")
    two_opt_budget = settings.alternative_two_opt_budget if two_opt_budget is None else two_opt_budget
    max_alternatives = settings.max_alternatives if max_alternatives is None else max_alternatives
    rng = rng or random.Random()

    clusters = prepare_clusters(sites, vehicle_count, weekly_capacity)

    population: list[FleetSolution] = []
    for member in range(population_size):
        # The first member is the plain nearest-neighbour tour; the rest explore.
        randomness = 0.0 if member == 0 else member_randomness(settings.alternative_randomness, member - 1)
        population.append(
            build_solution(
                depot,
                clusters,
                randomness=randomness,
                rng=rng,
                two_opt_budget=two_opt_budget,
            )
        )

    ranked = sorted(population, key=lambda solution: solution.total_distance_km)
    best = ranked[0]
    convergence = sorted((solution.total_distance_km for solution in population), reverse=True)
    baseline = baseline_distance_km(depot, clusters)

    logger.info(
        f"Optimization complete: best {best.total_distance_km:.1f}km over {len(best.routes)} vehicles "
        f"(baseline {baseline:.1f}km)"
    )

    return OptimizationResult(
        best_solution=best,
        alternative_solutions=ranked[1 : 1 + max_alternatives],
        iterations=len(population),
        convergence=convergence,
        baseline_distance_km=baseline,
    )

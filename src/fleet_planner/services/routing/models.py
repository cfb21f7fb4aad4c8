"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ...models.domain import Coordinate


@dataclass(slots=True)
class RouteCandidate:
    vehicle_id: str
    route: List[Coordinate]
    distance_km: float
    generation: int = 0
    site_ids: List[str] = field(default_factory=list)

    @property
    def stop_count(self) -> int:
        return max(len(self.route) - 2, 0)


@dataclass(slots=True)
class FleetSolution:
    """One population member: a route per non-empty cluster."""

    routes: List[RouteCandidate] = field(default_factory=list)

    @property
    def total_distance_km(self) -> float:
        return sum(route.distance_km for route in self.routes)


@dataclass(slots=True)
class ProgressSnapshot:
    generation: int
    routes: List[RouteCandidate]
    total_distance_km: float
    is_best: bool


@dataclass(slots=True)
class OptimizationResult:
    best_solution: FleetSolution
    alternative_solutions: List[FleetSolution]
    iterations: int
    convergence: List[float]
    baseline_distance_km: float = 0.0

    @property
    def distance_saving_km(self) -> float:
        return self.baseline_distance_km - self.best_solution.total_distance_km

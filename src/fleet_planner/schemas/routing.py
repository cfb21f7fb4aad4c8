"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..config import settings
from .sites import CoordinateModel, SiteModel


class RoutingRequest(BaseModel):
    sites: Optional[List[SiteModel]] = Field(
        default=None,
        description="Sites to route. Falls back to the configured site file when omitted.",
    )
    depot: Optional[CoordinateModel] = Field(default=None, description="Depot; defaults to the configured depot.")
    vehicle_count: int = Field(default_factory=lambda: settings.default_vehicle_count, ge=1)
    weekly_capacity: Optional[int] = Field(default=None, ge=0)
    seed: Optional[int] = Field(default=None, description="Seed for reproducible runs.")
    progress_delay_ms: Optional[int] = Field(default=None, ge=0)


class RouteModel(BaseModel):
    vehicle_id: str
    route: List[CoordinateModel]
    distance_km: float
    generation: int
    site_ids: List[str]


class FleetSolutionModel(BaseModel):
    total_distance_km: float
    routes: List[RouteModel]


class ProgressSnapshotModel(BaseModel):
    generation: int
    total_distance_km: float
    is_best: bool
    routes: List[RouteModel]


class RoutingResponse(BaseModel):
    best_solution: FleetSolutionModel
    alternative_solutions: List[FleetSolutionModel]
    iterations: int
    convergence: List[float]
    metadata: dict

"""Routing orchestration service."""

from __future__ import annotations

import asyncio
import json
import logging
import random
from typing import AsyncIterator

from ...data.sites_repository import load_sites, resolve_depot
from ...models.domain import Coordinate, Site
from ...schemas.routing import (
    FleetSolutionModel,
    ProgressSnapshotModel,
    RouteModel,
    RoutingRequest,
    RoutingResponse,
)
from ...schemas.sites import CoordinateModel
from ..export.geojson import routes_to_geojson
from ..outputs.routing_formatter import solution_to_json
from ..tasks import summarize_consolidation
from .models import FleetSolution, OptimizationResult, ProgressSnapshot, RouteCandidate
from .optimizer import optimize_routes_with_alternatives
from .progressive import CancellationToken, optimize_with_progress

logger = logging.getLogger(__name__)


def _resolve_sites(payload: RoutingRequest) -> list[Site]:
    if payload.sites is not None:
        return [site.to_domain() for site in payload.sites]
    return list(load_sites())


def _resolve_depot(payload: RoutingRequest) -> Coordinate:
    if payload.depot is None:
        return resolve_depot()
    return resolve_depot(payload.depot.lat, payload.depot.lng)


def _rng(payload: RoutingRequest) -> random.Random:
    return random.Random(payload.seed) if payload.seed is not None else random.Random()


def _route_model(route: RouteCandidate) -> RouteModel:
    return RouteModel(
        vehicle_id=route.vehicle_id,
        route=[CoordinateModel.from_domain(point) for point in route.route],
        distance_km=route.distance_km,
        generation=route.generation,
        site_ids=list(route.site_ids),
    )


def _solution_model(solution: FleetSolution) -> FleetSolutionModel:
    return FleetSolutionModel(
        total_distance_km=solution.total_distance_km,
        routes=[_route_model(route) for route in solution.routes],
    )


def run_optimizer(payload: RoutingRequest) -> tuple[OptimizationResult, Coordinate, list[Site]]:
    sites = _resolve_sites(payload)
    depot = _resolve_depot(payload)
    result = optimize_routes_with_alternatives(
        sites,
        depot,
        payload.vehicle_count,
        weekly_capacity=payload.weekly_capacity,
        rng=_rng(payload),
    )
    return result, depot, sites


def optimize_routes(payload: RoutingRequest) -> RoutingResponse:
    result, depot, sites = run_optimizer(payload)
    best = result.best_solution

    metadata = {
        "status": "optimal" if best.routes else "empty",
        "vehicles": len(best.routes),
        "requested_vehicles": payload.vehicle_count,
        "routed_sites": sum(route.stop_count for route in best.routes),
        "depot": {"lat": depot.latitude, "lng": depot.longitude},
        "baseline_distance_km": result.baseline_distance_km,
        "distance_saving_km": result.distance_saving_km,
        "consolidation": summarize_consolidation(sites),
        "map_overlays": {"routes": routes_to_geojson(best, depot)},
    }

    return RoutingResponse(
        best_solution=_solution_model(best),
        alternative_solutions=[_solution_model(solution) for solution in result.alternative_solutions],
        iterations=result.iterations,
        convergence=result.convergence,
        metadata=metadata,
    )


def _snapshot_line(snapshot: ProgressSnapshot) -> str:
    model = ProgressSnapshotModel(
        generation=snapshot.generation,
        total_distance_km=snapshot.total_distance_km,
        is_best=snapshot.is_best,
        routes=[_route_model(route) for route in snapshot.routes],
    )
    return json.dumps({"event": "progress", **model.model_dump(mode="json")})


def resolve_inputs(payload: RoutingRequest) -> tuple[list[Site], Coordinate]:
    return _resolve_sites(payload), _resolve_depot(payload)


async def stream_progress(
    payload: RoutingRequest,
    sites: list[Site],
    depot: Coordinate,
    cancel_token: CancellationToken | None = None,
) -> AsyncIterator[str]:
    """Yield newline-delimited JSON: one progress line per generation, then a completion line.

    ``sites`` and ``depot`` come from :func:`resolve_inputs` so input errors surface
    before the stream starts.
    """

    delay_seconds = None if payload.progress_delay_ms is None else payload.progress_delay_ms / 1000.0
    cancel_token = cancel_token or CancellationToken()
    queue: asyncio.Queue[str] = asyncio.Queue()

    def on_progress(snapshot: ProgressSnapshot) -> None:
        queue.put_nowait(_snapshot_line(snapshot) + "\n")

    task = asyncio.create_task(
        optimize_with_progress(
            sites,
            depot,
            payload.vehicle_count,
            on_progress,
            weekly_capacity=payload.weekly_capacity,
            delay_seconds=delay_seconds,
            rng=_rng(payload),
            cancel_token=cancel_token,
        )
    )

    try:
        while not task.done() or not queue.empty():
            getter = asyncio.ensure_future(queue.get())
            done, _ = await asyncio.wait({getter, task}, return_when=asyncio.FIRST_COMPLETED)
            if getter in done:
                yield getter.result()
            else:
                getter.cancel()
        best = task.result()
        yield json.dumps({"event": "complete", **solution_to_json(best)}) + "\n"
    finally:
        # Consumer stopped reading early: stop the driver at its next generation boundary.
        cancel_token.cancel()
        if not task.done():
            await task

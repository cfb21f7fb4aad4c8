"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse, StreamingResponse

from ...schemas.routing import RoutingRequest, RoutingResponse
from ...services.export.geojson import routes_to_geojson
from ...services.outputs.routing_formatter import solution_to_csv
from ...services.routing.service import optimize_routes, resolve_inputs, run_optimizer, stream_progress

router = APIRouter(prefix="/routes", tags=["routes"])


def _raise_for(exc: Exception, action: str) -> None:
    if isinstance(exc, FileNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    if isinstance(exc, ValueError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    logging.exception(f"Error {action}: {exc}")
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed {action}: {str(exc)}",
    ) from exc


@router.post("/optimize", response_model=RoutingResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RoutingRequest) -> RoutingResponse:
    try:
        return optimize_routes(payload)
    except Exception as exc:
        _raise_for(exc, "optimizing routes")


@router.post("/optimize/progressive", status_code=status.HTTP_200_OK)
def optimize_progressive(payload: RoutingRequest) -> StreamingResponse:
    """Stream one JSON line per generation, then the overall best solution."""
    try:
        sites, depot = resolve_inputs(payload)
    except Exception as exc:
        _raise_for(exc, "loading sites")
    return StreamingResponse(stream_progress(payload, sites, depot), media_type="application/x-ndjson")


@router.post("/export/geojson", status_code=status.HTTP_200_OK)
def export_geojson(payload: RoutingRequest) -> dict:
    try:
        result, depot, _ = run_optimizer(payload)
    except Exception as exc:
        _raise_for(exc, "exporting routes")
    return routes_to_geojson(result.best_solution, depot)


@router.post("/export/csv", response_class=PlainTextResponse, status_code=status.HTTP_200_OK)
def export_csv(payload: RoutingRequest) -> PlainTextResponse:
    try:
        result, _, _ = run_optimizer(payload)
    except Exception as exc:
        _raise_for(exc, "exporting routes")
    return PlainTextResponse(solution_to_csv(result.best_solution), media_type="text/csv")

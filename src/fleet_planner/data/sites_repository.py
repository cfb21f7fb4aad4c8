"""Data access helpers for loading site records and the depot."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..config import settings
from ..models.domain import Coordinate, Site, TransportTask

logger = logging.getLogger(__name__)


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace(",", ""))
    except ValueError as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


def _parse_location(record: dict) -> Optional[Coordinate]:
    location = record.get("location") or {}
    if not isinstance(location, dict):
        raise ValueError(f"Location must be an object, got {type(location).__name__}.")
    lat = _coerce_float(location.get("lat", record.get("latitude")))
    lon = _coerce_float(location.get("lng", location.get("lon", record.get("longitude"))))
    if lat is None or lon is None:
        return None
    return Coordinate(latitude=lat, longitude=lon)


def _parse_tasks(raw_tasks: Any) -> Optional[tuple[TransportTask, ...]]:
    if not isinstance(raw_tasks, list):
        return None
    tasks: list[TransportTask] = []
    for raw in raw_tasks:
        if isinstance(raw, str):
            tasks.append(TransportTask(task_type=raw))
        elif isinstance(raw, dict):
            tasks.append(
                TransportTask(
                    task_type=str(raw.get("type") or raw.get("task_type") or ""),
                    charge=_coerce_float(raw.get("charge")),
                )
            )
    return tuple(tasks)


def parse_site(record: dict) -> Site:
    site_id = str(record.get("id") or record.get("site_id") or "").strip()
    if not site_id:
        raise ValueError("Site record is missing an id.")
    location = _parse_location(record)
    if location is None:
        raise ValueError(f"Site '{site_id}' has no coordinates.")
    return Site(
        site_id=site_id,
        location=location,
        transport_tasks=_parse_tasks(record.get("transport_tasks")),
        name=record.get("name"),
    )


@functools.lru_cache(maxsize=1)
def load_sites(source: Optional[Path] = None) -> tuple[Site, ...]:
    """Load sites from the configured JSON file."""

    json_path = source or settings.sites_file
    if not json_path.exists():
        raise FileNotFoundError(f"Site file not found: {json_path}")

    with json_path.open(mode="r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if isinstance(payload, dict):
        payload = payload.get("sites")
    if not isinstance(payload, list):
        raise ValueError(f"Site file '{json_path}' must contain a list of sites.")

    sites: list[Site] = []
    for record in payload:
        if not isinstance(record, dict):
            continue
        try:
            sites.append(parse_site(record))
        except ValueError as exc:
            logger.warning(f"Skipping invalid site record: {exc}")
    return tuple(sites)


def resolve_depot(latitude: Optional[float] = None, longitude: Optional[float] = None) -> Coordinate:
    """Return the requested depot, falling back to the configured one."""

    if latitude is None or longitude is None:
        return Coordinate(latitude=settings.depot_latitude, longitude=settings.depot_longitude)
    return Coordinate(latitude=latitude, longitude=longitude)

"""Site request/response schemas."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Coordinate, Site, TransportTask


class CoordinateModel(BaseModel):
    lat: float
    lng: float

    def to_domain(self) -> Coordinate:
        return Coordinate(latitude=self.lat, longitude=self.lng)

    @classmethod
    def from_domain(cls, coordinate: Coordinate) -> "CoordinateModel":
        return cls(lat=coordinate.latitude, lng=coordinate.longitude)


class TransportTaskModel(BaseModel):
    type: str = Field(..., description="Free-form task label, e.g. 'Delivery-Standard'.")
    charge: Optional[float] = None


class SiteModel(BaseModel):
    id: str
    name: Optional[str] = None
    location: CoordinateModel
    transport_tasks: Optional[List[TransportTaskModel]] = None

    def to_domain(self) -> Site:
        tasks = None
        if self.transport_tasks is not None:
            tasks = tuple(TransportTask(task_type=task.type, charge=task.charge) for task in self.transport_tasks)
        return Site(
            site_id=self.id,
            location=self.location.to_domain(),
            transport_tasks=tasks,
            name=self.name,
        )

    @classmethod
    def from_domain(cls, site: Site) -> "SiteModel":
        tasks = None
        if site.transport_tasks is not None:
            tasks = [TransportTaskModel(type=task.task_type, charge=task.charge) for task in site.transport_tasks]
        return cls(
            id=site.site_id,
            name=site.name,
            location=CoordinateModel.from_domain(site.location),
            transport_tasks=tasks,
        )


class SiteListResponse(BaseModel):
    total: int
    items: List[SiteModel]


class ConsolidationSummary(BaseModel):
    total_historical_tasks: int
    unique_sites: int
    consolidated_operations: int
    task_kinds: Dict[str, int]
    explanation: str

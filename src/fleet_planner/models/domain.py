"""Domain models for sites, transport tasks and coordinates."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees. Values are not range checked."""

    latitude: float
    longitude: float


class TaskKind(str, Enum):
    DELIVERY = "delivery"
    COLLECTION = "collection"
    COMPETITOR_RENTAL = "competitor_rental"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class TransportTask:
    """A pending transport job; the type label is free-form text."""

    task_type: str
    charge: Optional[float] = None


@dataclass(frozen=True, slots=True)
class Site:
    """Represents a physical site and the transport tasks pending there.

    ``transport_tasks`` mirrors upstream records, so it may be missing (``None``)
    for sites that were never scheduled.
    """

    site_id: str
    location: Coordinate
    transport_tasks: Optional[Sequence[TransportTask]] = None
    name: Optional[str] = None

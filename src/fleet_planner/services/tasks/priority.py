"""Weekly priority selection for consolidated sites."""

from __future__ import annotations

import logging
from typing import Sequence

from ...config import settings
from ...models.domain import Site
from .consolidation import COMPETITOR_RENTAL_LABEL

logger = logging.getLogger(__name__)

TASK_COUNT_WEIGHT = 10
DELIVERY_BONUS = 50
COLLECTION_BONUS = 30
COMPETITOR_RENTAL_BONUS = 100


def _labels(site: Site) -> list[str]:
    return [task.task_type for task in (site.transport_tasks or ()) if isinstance(task.task_type, str)]


def priority_score(site: Site) -> int:
    """Score a site: busier sites, deliveries and competitor rentals come first."""

    tasks = site.transport_tasks or ()
    labels = _labels(site)
    lowered = [label.lower() for label in labels]

    score = TASK_COUNT_WEIGHT * len(tasks)
    if any("delivery" in label for label in lowered):
        score += DELIVERY_BONUS
    if any("collection" in label for label in lowered):
        score += COLLECTION_BONUS
    if any(label == COMPETITOR_RENTAL_LABEL for label in labels):
        score += COMPETITOR_RENTAL_BONUS
    return score


def select_priority_sites(sites: Sequence[Site], capacity: int | None = None) -> list[Site]:
    """Return the ``capacity`` highest scoring sites.

    The sort is stable, so equal scores keep their input order. When every
    site fits within capacity the input order is returned untouched.
    """
    capacity = settings.weekly_priority_capacity if capacity is None else capacity
    if len(sites) <= capacity:
        selected = list(sites)
    else:
        ranked = sorted(sites, key=priority_score, reverse=True)
        selected = ranked[: max(capacity, 0)]
    logger.info(f"Task prioritization: selected {len(selected)} highest priority sites from {len(sites)} total")
    return selected

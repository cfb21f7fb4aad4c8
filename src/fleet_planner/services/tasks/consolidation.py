"""Task consolidation: collapse each site's task history into one pending visit."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ...models.domain import Site, TaskKind

logger = logging.getLogger(__name__)

COMPETITOR_RENTAL_LABEL = "competitor_rental"


def classify_task(task_type: object) -> TaskKind:
    """Classify a free-form task label.

    Competitor rentals are matched exactly; delivery and collection by
    case-insensitive substring. Anything else, including non-string labels,
    is ``TaskKind.OTHER``.
    """
    if not isinstance(task_type, str):
        return TaskKind.OTHER
    if task_type == COMPETITOR_RENTAL_LABEL:
        return TaskKind.COMPETITOR_RENTAL
    lowered = task_type.lower()
    if "delivery" in lowered:
        return TaskKind.DELIVERY
    if "collection" in lowered:
        return TaskKind.COLLECTION
    return TaskKind.OTHER


def has_pending_tasks(site: Site) -> bool:
    tasks = site.transport_tasks
    return isinstance(tasks, (list, tuple)) and len(tasks) > 0


def consolidate_sites(sites: Iterable[Site]) -> list[Site]:
    """Return the sites with at least one pending task, in input order."""

    return [site for site in sites if has_pending_tasks(site)]


def summarize_consolidation(sites: Sequence[Site]) -> dict:
    """Explain how historical task records map onto site visits."""

    consolidated = consolidate_sites(sites)
    total_tasks = sum(len(site.transport_tasks) for site in consolidated)
    kinds: dict[str, int] = {kind.value: 0 for kind in TaskKind}
    for site in consolidated:
        for task in site.transport_tasks:
            kinds[classify_task(task.task_type).value] += 1

    return {
        "total_historical_tasks": total_tasks,
        "unique_sites": len(consolidated),
        "consolidated_operations": len(consolidated),
        "task_kinds": kinds,
        "explanation": (
            f"{total_tasks} historical task records consolidated into {len(consolidated)} site visits. "
            "Multiple tasks to the same site are grouped into a single efficient visit."
        ),
    }

"""Task consolidation and prioritization helpers."""

from .consolidation import classify_task, consolidate_sites, summarize_consolidation
from .priority import priority_score, select_priority_sites

__all__ = [
    "classify_task",
    "consolidate_sites",
    "summarize_consolidation",
    "priority_score",
    "select_priority_sites",
]

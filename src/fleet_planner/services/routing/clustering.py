"""Spatial clustering of selected sites into per-vehicle groups."""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from ...models.domain import Site
from ..geospatial import distance_matrix

logger = logging.getLogger(__name__)


def seed_centers(sites: Sequence[Site], k: int) -> list[Site]:
    """Pick ``k`` seeds at evenly spaced ranks of the latitude ordering."""

    ordered = sorted(sites, key=lambda site: site.location.latitude)
    count = len(sites)
    return [ordered[math.floor((index / k) * count)] for index in range(k)]


def cluster_sites(sites: Sequence[Site], k: int) -> list[list[Site]]:
    """Partition sites into at most ``k`` non-empty groups.

    Single pass: seeds are chosen deterministically, every site joins its
    nearest seed (lowest index on ties) and centres are never recomputed.
    """
    if k < 1:
        raise ValueError("k must be >= 1")
    if not sites:
        return []
    if len(sites) <= k:
        return [[site] for site in sites]

    centers = [seed.location for seed in seed_centers(sites, k)]
    distances = distance_matrix([site.location for site in sites], centers)
    labels = np.argmin(distances, axis=1)

    clusters: list[list[Site]] = [[] for _ in range(k)]
    for site, label in zip(sites, labels):
        clusters[int(label)].append(site)

    non_empty = [cluster for cluster in clusters if cluster]
    logger.info(f"Clustered {len(sites)} sites into {len(non_empty)} groups")
    return non_empty

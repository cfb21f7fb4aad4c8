"""Randomized greedy nearest-neighbour route construction."""

from __future__ import annotations

import random
from typing import Protocol, Sequence

from ...models.domain import Coordinate, Site
from ..geospatial import distance


class RandomSource(Protocol):
    """Anything that behaves like :class:`random.Random` for our purposes."""

    def random(self) -> float: ...

    def randrange(self, stop: int) -> int: ...


def vehicle_label(index: int) -> str:
    """Truck-A, Truck-B, ... Truck-Z, Truck-AA, ..."""

    letters = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(65 + remainder) + letters
    return f"Truck-{letters}"


def build_route(
    depot: Coordinate,
    sites: Sequence[Site],
    randomness: float = 0.0,
    rng: RandomSource | None = None,
) -> list[Coordinate]:
    """Build a depot-to-depot tour over ``sites``.

    At each step a uniformly random remaining site is taken with probability
    ``randomness``; otherwise the nearest one (first encountered on ties).
    """
    if not sites:
        return [depot, depot]

    rng = rng or random.Random()
    route = [depot]
    remaining = list(sites)
    current = depot

    while remaining:
        if randomness > 0 and rng.random() < randomness:
            selected_index = rng.randrange(len(remaining))
        else:
            selected_index = 0
            min_distance = float("inf")
            for index, site in enumerate(remaining):
                dist = distance(current, site.location)
                if dist < min_distance:
                    min_distance = dist
                    selected_index = index

        current = remaining.pop(selected_index).location
        route.append(current)

    route.append(depot)
    return route

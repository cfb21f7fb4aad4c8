"""Progressive population optimizer with live progress callbacks.

Runs a fixed number of generations. Each generation builds a population of
full-fleet solutions, reports the generation's best through the callback and
pauses briefly so a consuming UI can render it. The best solution over all
generations is returned.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import random
from typing import Awaitable, Callable, Optional, Sequence, Union

from ...config import settings
from ...models.domain import Coordinate, Site
from .construction import RandomSource
from .models import FleetSolution, ProgressSnapshot
from .optimizer import build_solution, prepare_clusters
from .stages import DEFAULT_GENERATION_STAGES, GenerationStage, member_randomness, stage_for_generation

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressSnapshot], Union[None, Awaitable[None]]]


class CancellationToken:
    """Cooperative cancellation flag checked once per generation boundary."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


def _build_population(
    depot: Coordinate,
    clusters: Sequence[Sequence[Site]],
    stage: GenerationStage,
    population_size: int,
    rng: RandomSource,
    generation: int,
) -> list[FleetSolution]:
    budget = stage.iteration_budget if stage.apply_two_opt else None
    return [
        build_solution(
            depot,
            clusters,
            randomness=member_randomness(stage.randomness, member),
            rng=rng,
            two_opt_budget=budget,
            generation=generation,
        )
        for member in range(population_size)
    ]


async def optimize_with_progress(
    sites: Sequence[Site],
    depot: Coordinate,
    vehicle_count: int,
    progress_callback: ProgressCallback,
    *,
    weekly_capacity: int | None = None,
    generations: int | None = None,
    population_size: int | None = None,
    stages: Sequence[GenerationStage] = DEFAULT_GENERATION_STAGES,
    delay_seconds: float | None = None,
    rng: RandomSource | None = None,
    cancel_token: Optional[CancellationToken] = None,
) -> FleetSolution:
    generations = settings.generations if generations is None else generations
    population_size = settings.population_size if population_size is None else population_size
    delay_seconds = settings.progress_delay_seconds if delay_seconds is None else delay_seconds
    if population_size < 1:
        raise ValueError("population_size must be >= 1")
    rng = rng or random.Random()

    logger.info(f"Starting progressive optimization with {len(sites)} sites")
    clusters = prepare_clusters(sites, vehicle_count, weekly_capacity)

    best_solution = FleetSolution()
    best_distance = float("inf")

    for generation in range(1, generations + 1):
        if cancel_token is not None and cancel_token.cancelled:
            logger.info(f"Optimization cancelled before generation {generation}")
            break

        stage = stage_for_generation(generation, stages)
        # Construction and 2-opt are CPU bound; keep them off the event loop.
        population = await asyncio.to_thread(
            _build_population, depot, clusters, stage, population_size, rng, generation
        )

        generation_best = population[0]
        for candidate in population[1:]:
            if candidate.total_distance_km < generation_best.total_distance_km:
                generation_best = candidate
        generation_distance = generation_best.total_distance_km

        is_best = generation_distance < best_distance
        if is_best:
            best_solution = generation_best
            best_distance = generation_distance

        outcome = progress_callback(
            ProgressSnapshot(
                generation=generation,
                routes=generation_best.routes,
                total_distance_km=generation_distance,
                is_best=is_best,
            )
        )
        if inspect.isawaitable(outcome):
            await outcome

        logger.info(
            f"Generation {generation}/{generations}: best={generation_distance:.1f}km"
            + (" (new best)" if is_best else "")
        )
        await asyncio.sleep(delay_seconds)

    logger.info(f"Optimization complete. Best solution: {best_solution.total_distance_km:.1f}km")
    return best_solution

"""Generation-stage table for the progressive optimizer.

Early generations explore (high randomness, no local search); later ones
exploit (low randomness, longer 2-opt budgets).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ...config import settings


@dataclass(frozen=True, slots=True)
class GenerationStage:
    """Settings for the 1-based generation range ``first..last`` (open ended if ``last`` is None)."""

    first_generation: int
    last_generation: Optional[int]
    randomness: float
    apply_two_opt: bool
    iteration_budget: int

    def covers(self, generation: int) -> bool:
        if generation < self.first_generation:
            return False
        return self.last_generation is None or generation <= self.last_generation


DEFAULT_GENERATION_STAGES: tuple[GenerationStage, ...] = (
    GenerationStage(1, 4, randomness=0.4, apply_two_opt=False, iteration_budget=0),
    GenerationStage(5, 8, randomness=0.2, apply_two_opt=True, iteration_budget=30),
    GenerationStage(9, 9, randomness=0.05, apply_two_opt=True, iteration_budget=30),
    GenerationStage(10, None, randomness=0.05, apply_two_opt=True, iteration_budget=50),
)


def stage_for_generation(
    generation: int,
    stages: Sequence[GenerationStage] = DEFAULT_GENERATION_STAGES,
) -> GenerationStage:
    for stage in stages:
        if stage.covers(generation):
            return stage
    raise ValueError(f"No generation stage configured for generation {generation}")


def member_randomness(base: float, member_index: int, step: float | None = None) -> float:
    """Later population members explore more than earlier ones; capped at 1."""

    step = settings.member_randomness_step if step is None else step
    return min(1.0, base * (1 + member_index * step))

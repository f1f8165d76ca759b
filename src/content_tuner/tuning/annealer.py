"""
Simulated annealing over an arbitrary solution space.

The search is driven by a strategy holding three functions: where to
start, how to move, and what a solution costs. It tracks and returns the
best solution seen, never just the last one visited.
"""

import math
import random
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, TypeVar

from content_tuner.config.settings import TunerSettings
from content_tuner.utils.logging import get_logger

logger = get_logger(__name__)

S = TypeVar("S", bound=Hashable)


@dataclass(frozen=True)
class AnnealingSchedule:
    """Temperature schedule of an annealing run."""

    initial_temperature: float = 5000.0
    cooling_steps: int = 5000
    cooling_fraction: float = 0.95
    steps_per_temp: int = 1000
    boltzmann_constant: float = 1.3806485279e-23

    @classmethod
    def from_settings(cls, settings: TunerSettings) -> "AnnealingSchedule":
        return cls(
            initial_temperature=settings.initial_temperature,
            cooling_steps=settings.cooling_steps,
            cooling_fraction=settings.cooling_fraction,
            steps_per_temp=settings.steps_per_temp,
            boltzmann_constant=settings.boltzmann_constant,
        )


@dataclass(frozen=True)
class AnnealingStrategy(Generic[S]):
    """
    The problem-specific half of an annealing search.

    Solutions must be hashable: costs are memoized per solution.
    """

    initial_solution: Callable[[], S]
    random_transition: Callable[[S], S]
    solution_cost: Callable[[S], float]


@dataclass
class AnnealingResult(Generic[S]):
    """Outcome of an annealing run."""

    best_solution: S
    best_cost: float
    initial_cost: float
    iterations: int = 0
    jumps: int = 0
    cache_hits: int = 0
    cache_misses: int = 0

    @property
    def cache_hit_rate(self) -> float:
        lookups = self.cache_hits + self.cache_misses
        return self.cache_hits / lookups if lookups else 0.0


def _merit(minus_delta: float, scaled_temperature: float) -> float:
    """Probability of taking a move that doesn't improve the cost."""
    if scaled_temperature <= 0:
        # Frozen: only sideways moves remain possible
        return 1.0 if minus_delta == 0 else 0.0
    return math.exp(minus_delta / scaled_temperature)


def anneal(
    strategy: AnnealingStrategy[S],
    schedule: AnnealingSchedule | None = None,
    rng: random.Random | None = None,
) -> AnnealingResult[S]:
    """
    Search for a low-cost solution by simulated annealing.

    Improvements are always taken. Other moves are taken with probability
    exp(-delta / (k * T)). At each temperature, moves stop as soon as one
    leaves the current cost unchanged.

    Args:
        strategy: Initial solution, neighbor function and cost function
        schedule: Temperature schedule; defaults to AnnealingSchedule()
        rng: Source of randomness for acceptance; defaults to a fresh Random

    Returns:
        The best solution seen, with its cost and run statistics
    """
    schedule = schedule or AnnealingSchedule()
    rng = rng or random.Random()

    current = strategy.initial_solution()
    current_cost = strategy.solution_cost(current)
    result = AnnealingResult(
        best_solution=current, best_cost=current_cost, initial_cost=current_cost)
    costs: dict[S, float] = {current: current_cost}

    def cost_of(solution: S) -> float:
        if solution in costs:
            result.cache_hits += 1
        else:
            result.cache_misses += 1
            costs[solution] = strategy.solution_cost(solution)
        return costs[solution]

    logger.info(f"Starting annealing at cost {current_cost:.4f}")

    temperature = schedule.initial_temperature
    for step in range(schedule.cooling_steps):
        logger.debug(f"Cooling step {step} of {schedule.cooling_steps}")
        start_cost = current_cost
        for _ in range(schedule.steps_per_temp):
            candidate = strategy.random_transition(current)
            candidate_cost = cost_of(candidate)

            if candidate_cost < current_cost:
                current, current_cost = candidate, candidate_cost
                if candidate_cost < result.best_cost:
                    result.best_solution = candidate
                    result.best_cost = candidate_cost
                    logger.info(
                        f"New best solution {candidate} with cost {candidate_cost:.4f}")
            else:
                if _merit(current_cost - candidate_cost,
                          schedule.boltzmann_constant * temperature) > rng.random():
                    result.jumps += 1
                    current, current_cost = candidate, candidate_cost

            result.iterations += 1
            if current_cost == start_cost:
                break
        temperature *= schedule.cooling_fraction

    logger.info(
        f"Annealing finished: {result.iterations} iterations, {result.jumps} jumps, "
        f"cache hit rate {result.cache_hit_rate:.2%}, best cost {result.best_cost:.4f}"
    )
    return result

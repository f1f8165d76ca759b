"""
Coefficient tuning by simulated annealing.

The objective is the deviation score of the whole corpus, which involves
a discrete clustering step and so has no gradient. The search nudges one
coefficient at a time and keeps whatever scores best.
"""

import random
from dataclasses import dataclass
from typing import Sequence

from content_tuner.config.settings import Settings
from content_tuner.evaluation.corpus import DocPair
from content_tuner.evaluation.diff_stats import deviation_score
from content_tuner.extraction.content_extractor import Coefficients
from content_tuner.tuning.annealer import (
    AnnealingResult,
    AnnealingSchedule,
    AnnealingStrategy,
    anneal,
)
from content_tuner.utils.logging import get_logger
from content_tuner.utils.metrics import increment_tuning_trials

logger = get_logger(__name__)

Vector = tuple[float, ...]


@dataclass
class TuningResult:
    """Best coefficients found by a tuning run."""

    coefficients: Coefficients
    deviation: float
    initial_deviation: float
    annealing: AnnealingResult[Vector]

    @property
    def improvement(self) -> float:
        """How many percentage points the deviation dropped."""
        return self.initial_deviation - self.deviation


class CoefficientTuner:
    """
    Searches for the coefficients that extract a corpus most faithfully.

    The corpus is parsed once by the caller and shared, read-only, by
    every trial. Each trial builds its own extractor from its own vector.

    Example:
        >>> pairs = readability_doc_pairs()
        >>> tuner = CoefficientTuner(pairs, rng=random.Random(0))
        >>> result = tuner.tune()
        >>> print(result.coefficients, result.deviation)
    """

    def __init__(
        self,
        doc_pairs: Sequence[DocPair],
        initial: Coefficients | Sequence[float] | None = None,
        step: float = 0.5,
        schedule: AnnealingSchedule | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize the tuner.

        Args:
            doc_pairs: Loaded corpus to score each trial against
            initial: Starting coefficients; the baseline if None
            step: How far one coefficient moves per transition
            schedule: Annealing temperature schedule
            rng: Source of randomness for moves and acceptance
        """
        if initial is None:
            initial = Coefficients()
        elif not isinstance(initial, Coefficients):
            initial = Coefficients.from_sequence(initial)

        self.doc_pairs = list(doc_pairs)
        self.initial = initial
        self.step = step
        self.schedule = schedule or AnnealingSchedule()
        self.rng = rng or random.Random()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        doc_pairs: Sequence[DocPair],
    ) -> "CoefficientTuner":
        """Create a tuner from application settings."""
        return cls(
            doc_pairs,
            initial=settings.extraction.coefficients,
            step=settings.tuner.step,
            schedule=AnnealingSchedule.from_settings(settings.tuner),
            rng=random.Random(settings.tuner.seed),
        )

    def initial_solution(self) -> Vector:
        return self.initial.as_tuple()

    def random_transition(self, solution: Vector) -> Vector:
        """Nudge one random coefficient up or down by the step size."""
        moved = list(solution)
        index = self.rng.randrange(len(moved))
        moved[index] += -self.step if self.rng.random() < 0.5 else self.step
        return tuple(moved)

    def solution_cost(self, solution: Vector) -> float:
        increment_tuning_trials()
        return deviation_score(self.doc_pairs, solution)

    def strategy(self) -> AnnealingStrategy[Vector]:
        return AnnealingStrategy(
            initial_solution=self.initial_solution,
            random_transition=self.random_transition,
            solution_cost=self.solution_cost,
        )

    def tune(self) -> TuningResult:
        """Run the search and return the best coefficients seen."""
        logger.info(
            f"Tuning {len(self.doc_pairs)} test cases from {self.initial.as_tuple()}")
        outcome = anneal(self.strategy(), self.schedule, self.rng)
        return TuningResult(
            coefficients=Coefficients.from_sequence(outcome.best_solution),
            deviation=outcome.best_cost,
            initial_deviation=outcome.initial_cost,
            annealing=outcome,
        )

"""
Tuning module for content-tuner.

Searches the coefficient space for the extractor that best matches a
hand-labeled corpus.
"""

from content_tuner.tuning.annealer import (
    AnnealingResult,
    AnnealingSchedule,
    AnnealingStrategy,
    anneal,
)
from content_tuner.tuning.tuner import CoefficientTuner, TuningResult

__all__ = [
    # Annealing
    "AnnealingResult",
    "AnnealingSchedule",
    "AnnealingStrategy",
    "anneal",
    # Tuner
    "CoefficientTuner",
    "TuningResult",
]

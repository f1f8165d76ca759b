"""
Utilities module for content-tuner.

Provides logging setup and lightweight metrics.
"""

from content_tuner.utils.logging import setup_logging, get_logger, reset_logging
from content_tuner.utils.metrics import (
    Metrics,
    TimingStats,
    increment_comparisons,
    increment_tuning_trials,
    time_extraction,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "reset_logging",
    # Metrics
    "Metrics",
    "TimingStats",
    "increment_comparisons",
    "increment_tuning_trials",
    "time_extraction",
]

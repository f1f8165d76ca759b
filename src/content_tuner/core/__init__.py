"""
Core module for content-tuner.

Contains the exception hierarchy used throughout the application.
"""

from content_tuner.core.exceptions import (
    ContentTunerError,
    ConfigurationError,
    ExtractionError,
    EvaluationError,
    EmptyCorpusError,
    CorpusError,
    MissingFixtureError,
)

__all__ = [
    # Base
    "ContentTunerError",
    "ConfigurationError",
    # Extraction
    "ExtractionError",
    # Evaluation
    "EvaluationError",
    "EmptyCorpusError",
    # Corpus
    "CorpusError",
    "MissingFixtureError",
]

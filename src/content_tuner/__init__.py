"""
content-tuner - Main content extraction with automatically tuned coefficients.

This package finds the body text of HTML pages by scoring and clustering
text blocks, measures how far the result is from hand-labeled expected
output, and tunes the scoring coefficients against a corpus.
"""

__version__ = "0.1.0"

from content_tuner.config import Settings, load_config
from content_tuner.utils.logging import setup_logging, get_logger
from content_tuner.core.exceptions import ContentTunerError
from content_tuner.extraction import Coefficients, ContentExtractor, build_extractor
from content_tuner.evaluation import DiffStats, deviation_score, readability_doc_pairs
from content_tuner.tuning import CoefficientTuner

__all__ = [
    "Settings",
    "load_config",
    "setup_logging",
    "get_logger",
    "ContentTunerError",
    "Coefficients",
    "ContentExtractor",
    "build_extractor",
    "DiffStats",
    "deviation_score",
    "readability_doc_pairs",
    "CoefficientTuner",
]

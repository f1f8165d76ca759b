"""
Evaluation module for content-tuner.

Measures extraction quality against a hand-labeled corpus.
"""

from content_tuner.evaluation.corpus import (
    DocPair,
    expected_and_source_docs,
    load_corpus,
    readability_doc_pairs,
)
from content_tuner.evaluation.diff_stats import (
    DiffStats,
    deviation_score,
    normalize_text,
)

__all__ = [
    # Corpus
    "DocPair",
    "expected_and_source_docs",
    "load_corpus",
    "readability_doc_pairs",
    # Metric
    "DiffStats",
    "deviation_score",
    "normalize_text",
]

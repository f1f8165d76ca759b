"""
Extraction quality measured against hand-labeled expected output.

The measure is the edit distance between extracted and expected text,
summed over a corpus and expressed as a percentage of the expected text's
length. Lower is better; 0 is a perfect match.
"""

import re
from pathlib import Path
from typing import Iterable, Sequence

from bs4 import BeautifulSoup
from rapidfuzz import distance

from content_tuner.core.exceptions import EmptyCorpusError
from content_tuner.evaluation.corpus import DocPair, expected_and_source_docs
from content_tuner.extraction.content_extractor import (
    Coefficients,
    ContentExtractor,
    build_extractor,
)
from content_tuner.extraction.dom import text_content
from content_tuner.utils.logging import get_logger
from content_tuner.utils.metrics import increment_comparisons

logger = get_logger(__name__)

_NEWLINE_RUN = re.compile(r"\n\n+")


def trim_lines(text: str) -> str:
    """Remove leading and trailing whitespace from each line of a string."""
    return "\n".join(line.strip() for line in text.split("\n"))


def collapse_newlines(text: str) -> str:
    """Replace runs of line breaks with single ones."""
    return _NEWLINE_RUN.sub("\n", text)


def normalize_text(text: str) -> str:
    """Make text comparable regardless of surrounding whitespace."""
    return collapse_newlines(trim_lines(text))


class DiffStats:
    """
    Accumulates differences over a series of documents.

    Example:
        >>> stats = DiffStats(build_extractor())
        >>> for expected, source in pairs:
        ...     stats.compare(expected, source)
        >>> print(f"{stats.score():.2f}% off")
    """

    def __init__(self, extractor: ContentExtractor | None = None) -> None:
        self.extractor = extractor if extractor is not None else build_extractor()
        self.length_of_expected_texts = 0
        self.length_of_diffs = 0
        self.comparisons = 0

    def compare(self, expected_doc: BeautifulSoup, source_doc: BeautifulSoup) -> int:
        """
        Extract from a source document and measure how far off it is.

        Currently a surrounding-whitespace-insensitive comparison of text
        content. Nothing extracted counts as deleting all expected text.

        Returns:
            Edit distance between the normalized texts of this pair
        """
        expected_text = normalize_text(text_content(expected_doc))
        got_text = normalize_text(
            "\n".join(node.text for node in self.extractor(source_doc)))

        diff = distance.Levenshtein.distance(expected_text, got_text)
        self.length_of_expected_texts += len(expected_text)
        self.length_of_diffs += diff
        self.comparisons += 1
        increment_comparisons()

        logger.debug(
            f"Compared pair {self.comparisons}: distance {diff} "
            f"over {len(expected_text)} expected chars"
        )
        return diff

    def compare_files_in(self, folder: Path | str) -> int:
        """Compare the expected and source documents of a test case directory."""
        return self.compare(*expected_and_source_docs(folder))

    def score(self) -> float:
        """
        Return the accumulated difference as a percentage of expected text.

        Raises:
            EmptyCorpusError: If nothing has been compared, or all expected
                texts were empty
        """
        if self.comparisons == 0:
            raise EmptyCorpusError("No documents have been compared")
        if self.length_of_expected_texts == 0:
            raise EmptyCorpusError(
                "Expected texts are all empty", comparisons=self.comparisons)
        return self.length_of_diffs / self.length_of_expected_texts * 100


def deviation_score(
    doc_pairs: Iterable[DocPair],
    coefficients: Coefficients | Sequence[float] | None = None,
) -> float:
    """
    Score an extractor built from coefficients over a set of document pairs.

    This is the objective the coefficient tuner minimizes.
    """
    stats = DiffStats(build_extractor(coefficients))
    for expected, source in doc_pairs:
        stats.compare(expected, source)
    return stats.score()

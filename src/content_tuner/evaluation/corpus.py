"""
Loading of hand-labeled test corpora.

A corpus is a directory with one sub-directory per test case. Each case
holds the page as served (source.html) and just its main content as a
person would extract it (expected.html).
"""

from pathlib import Path
from typing import NamedTuple, Sequence

from bs4 import BeautifulSoup

from content_tuner.config.settings import DEFAULT_CORPUS_CASES, CorpusSettings
from content_tuner.core.exceptions import MissingFixtureError
from content_tuner.extraction.dom import static_dom
from content_tuner.utils.logging import get_logger

logger = get_logger(__name__)

EXPECTED_FILE = "expected.html"
SOURCE_FILE = "source.html"


class DocPair(NamedTuple):
    """One test case: the ideal extraction and the page to extract from."""

    expected: BeautifulSoup
    source: BeautifulSoup


def expected_and_source_docs(folder: Path | str) -> DocPair:
    """
    Parse the two documents of one test case.

    Raises:
        MissingFixtureError: If either file is absent
    """
    folder = Path(folder)
    docs = []
    for file_name in (EXPECTED_FILE, SOURCE_FILE):
        path = folder / file_name
        if not path.is_file():
            raise MissingFixtureError(
                f"Test case is missing {file_name}", folder=folder, file_name=file_name)
        docs.append(static_dom(path.read_bytes()))
    return DocPair(*docs)


def load_corpus(
    root: Path | str,
    cases: Sequence[str] = DEFAULT_CORPUS_CASES,
) -> list[DocPair]:
    """
    Load every named case under a corpus root, in order.

    Loading stops at the first broken case: scoring a partial corpus would
    silently change what the aggregate score means.
    """
    root = Path(root)
    pairs = [expected_and_source_docs(root / case) for case in cases]
    logger.info(f"Loaded {len(pairs)} test cases from {root}")
    return pairs


def readability_doc_pairs(settings: CorpusSettings | None = None) -> list[DocPair]:
    """Return (expected, source) pairs for the configured corpus."""
    settings = settings or CorpusSettings()
    return load_corpus(settings.root, settings.cases)

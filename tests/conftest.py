"""
Shared pytest fixtures for content-tuner tests.

Provides reusable fixtures for:
- Global state isolation
- Sample documents
- On-disk test corpora
"""

import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from content_tuner.config import reset_settings
from content_tuner.utils.logging import reset_logging
from content_tuner.utils.metrics import Metrics

ARTICLE_PARAGRAPHS = [
    "Simulated annealing is a probabilistic technique for approximating "
    "the global optimum of a function.",
    "It is often used when the search space is discrete, as with "
    "coefficient vectors nudged by fixed steps.",
    "At each temperature the search may accept a worse solution, which "
    "lets it escape local minima.",
]
ARTICLE_HEADING = "Annealing for fun"


@pytest.fixture(autouse=True)
def reset_global_state():
    """Reset cached settings, logging and metrics around each test."""
    reset_settings()
    reset_logging()
    Metrics.reset()
    yield
    reset_settings()
    reset_logging()
    Metrics.reset()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that's cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def article_html() -> str:
    """A page with a nav bar, an article and a link-only footer."""
    paragraphs = "\n".join(f"<p>{text}</p>" for text in ARTICLE_PARAGRAPHS)
    return f"""<html><head><title>Sample</title></head><body>
<nav><a href="/">Home</a> <a href="/news">News</a> <a href="/about">About</a></nav>
<div class="article">
<h1>{ARTICLE_HEADING}</h1>
{paragraphs}
</div>
<footer><div><a href="/privacy">Privacy</a> <a href="/terms">Terms</a></div></footer>
</body></html>"""


@pytest.fixture
def article_expected_html() -> str:
    """Hand-extracted main content of article_html."""
    return "\n".join(
        [f"<h1>{ARTICLE_HEADING}</h1>"]
        + [f"<p>{text}</p>" for text in ARTICLE_PARAGRAPHS]
    )


@pytest.fixture
def hello_expected_html() -> str:
    return "<body><p>Hello world</p></body>"


@pytest.fixture
def hello_source_html() -> str:
    return "<body><nav><a>Home</a></nav><p>Hello world</p></body>"


@pytest.fixture
def make_case(temp_dir: Path) -> Callable[..., Path]:
    """Provide a factory writing test case directories under temp_dir."""

    def _make_case(name: str, expected: str | None, source: str | None) -> Path:
        folder = temp_dir / name
        folder.mkdir(parents=True)
        if expected is not None:
            (folder / "expected.html").write_text(expected, encoding="utf-8")
        if source is not None:
            (folder / "source.html").write_text(source, encoding="utf-8")
        return folder

    return _make_case


@pytest.fixture
def corpus_dir(
    temp_dir: Path,
    make_case: Callable[..., Path],
    hello_expected_html: str,
    hello_source_html: str,
    article_expected_html: str,
    article_html: str,
) -> Path:
    """A two-case corpus the baseline coefficients extract perfectly."""
    make_case("hello", hello_expected_html, hello_source_html)
    make_case("article", article_expected_html, article_html)
    return temp_dir

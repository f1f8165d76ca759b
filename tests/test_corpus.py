"""
Tests for test corpus loading.
"""

from pathlib import Path
from typing import Callable

import pytest

from content_tuner.config import CorpusSettings
from content_tuner.core.exceptions import CorpusError, MissingFixtureError
from content_tuner.evaluation import (
    expected_and_source_docs,
    load_corpus,
    readability_doc_pairs,
)
from content_tuner.extraction.dom import text_content


class TestExpectedAndSourceDocs:
    """Tests for loading a single case."""

    def test_loads_both(self, make_case: Callable[..., Path]):
        folder = make_case("one", "<p>Expected</p>", "<p>Source</p>")

        expected, source = expected_and_source_docs(folder)

        assert text_content(expected) == "Expected"
        assert text_content(source) == "Source"

    def test_accepts_str_path(self, make_case: Callable[..., Path]):
        folder = make_case("one", "<p>E</p>", "<p>S</p>")

        pair = expected_and_source_docs(str(folder))

        assert text_content(pair.expected) == "E"

    def test_missing_expected(self, make_case: Callable[..., Path]):
        folder = make_case("broken", None, "<p>Source</p>")

        with pytest.raises(MissingFixtureError) as exc_info:
            expected_and_source_docs(folder)

        assert exc_info.value.file_name == "expected.html"
        assert exc_info.value.folder == folder

    def test_missing_source(self, make_case: Callable[..., Path]):
        folder = make_case("broken", "<p>Expected</p>", None)

        with pytest.raises(MissingFixtureError) as exc_info:
            expected_and_source_docs(folder)

        assert exc_info.value.file_name == "source.html"

    def test_missing_folder(self, temp_dir: Path):
        with pytest.raises(CorpusError):
            expected_and_source_docs(temp_dir / "nowhere")


class TestLoadCorpus:
    """Tests for load_corpus."""

    def test_keeps_case_order(self, make_case: Callable[..., Path], temp_dir: Path):
        for name in ("b", "a", "c"):
            make_case(name, f"<p>{name}</p>", "<p>x</p>")

        pairs = load_corpus(temp_dir, ["c", "a", "b"])

        assert [text_content(pair.expected) for pair in pairs] == ["c", "a", "b"]

    def test_stops_at_broken_case(self, make_case: Callable[..., Path], temp_dir: Path):
        """One missing file fails the whole corpus."""
        make_case("good", "<p>ok</p>", "<p>ok</p>")
        make_case("bad", "<p>ok</p>", None)

        with pytest.raises(MissingFixtureError) as exc_info:
            load_corpus(temp_dir, ["good", "bad"])

        assert exc_info.value.folder.name == "bad"


class TestReadabilityDocPairs:
    """Tests for readability_doc_pairs."""

    def test_from_settings(self, corpus_dir: Path):
        settings = CorpusSettings(root=corpus_dir, cases=["article", "hello"])

        pairs = readability_doc_pairs(settings)

        assert len(pairs) == 2
        assert text_content(pairs[1].expected) == "Hello world"

    def test_default_cases_missing(self, temp_dir: Path):
        """The default case list must all be present under the root."""
        with pytest.raises(MissingFixtureError):
            readability_doc_pairs(CorpusSettings(root=temp_dir))

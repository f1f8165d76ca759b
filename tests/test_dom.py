"""
Tests for DOM helpers.

Tests inline text measurement, link density and document ordering.
"""

import pytest

from content_tuner.extraction.dom import (
    dom_sort,
    inline_text_length,
    link_density,
    static_dom,
    text_content,
)
from content_tuner.extraction.content_extractor import Node


class TestInlineTextLength:
    """Tests for inline_text_length."""

    def test_counts_inline_children(self):
        """Text inside inline children counts toward the parent."""
        doc = static_dom("<p>Hello <b>big</b> world</p>")

        assert inline_text_length(doc.p) == len("Hello big world")

    def test_collapses_whitespace_runs(self):
        """Runs of whitespace count as a single character."""
        doc = static_dom("<p>Hello <b>big</b>   world</p>")

        assert inline_text_length(doc.p) == len("Hello big world")

    def test_skips_block_children(self):
        """Text in block-level children belongs to those children."""
        doc = static_dom("<div>Intro<p>Para text</p>Outro</div>")

        assert inline_text_length(doc.div) == len("IntroOutro")

    def test_skips_scripts_and_comments(self):
        """Script bodies and comments are not text."""
        doc = static_dom("<p>Text<script>var x = 1;</script><!-- hidden --></p>")

        assert inline_text_length(doc.p) == 4

    def test_empty_element(self):
        """An empty element has no inline text."""
        doc = static_dom("<p></p>")

        assert inline_text_length(doc.p) == 0

    def test_should_traverse_prunes(self):
        """A rejected child is skipped with its subtree."""
        doc = static_dom("<p>ab<a>cd<i>ef</i></a></p>")

        length = inline_text_length(doc.p, lambda node: node.name != "a")

        assert length == 2


class TestLinkDensity:
    """Tests for link_density."""

    def test_half_links(self):
        """Link text share is measured against all inline text."""
        doc = static_dom("<p>ab<a href='#'>cd</a></p>")

        assert link_density(doc.p) == pytest.approx(0.5)

    def test_all_links(self):
        """A paragraph of nothing but a link has density 1."""
        doc = static_dom("<li><a href='#'>Home</a></li>")

        assert link_density(doc.li) == pytest.approx(1.0)

    def test_uses_cached_length(self):
        """A precomputed inline length gives the same answer."""
        doc = static_dom("<p>abcdef<a href='#'>gh</a></p>")

        assert link_density(doc.p, 8) == pytest.approx(link_density(doc.p))

    def test_no_text_is_zero(self):
        """An element without text is not considered link-heavy."""
        doc = static_dom("<p></p>")

        assert link_density(doc.p) == 0.0


class TestDomSort:
    """Tests for dom_sort."""

    def test_sorts_elements(self):
        """Elements come back in document order."""
        doc = static_dom("<div><p>1</p><section><p>2</p></section><p>3</p></div>")
        paragraphs = doc.find_all("p")

        result = dom_sort(reversed(paragraphs))

        assert [id(e) for e in result] == [id(e) for e in paragraphs]

    def test_parents_before_children(self):
        """Pre-order puts an ancestor before its descendants."""
        doc = static_dom("<div><p>1</p></div>")

        result = dom_sort([doc.p, doc.div])

        assert result[0] is doc.div
        assert result[1] is doc.p

    def test_identical_markup_kept_apart(self):
        """Two paragraphs with the same markup keep their own positions."""
        doc = static_dom("<p>same</p><p>other</p><p>same</p>")
        first, middle, last = doc.find_all("p")

        result = dom_sort([last, first, middle])

        assert result[0] is first
        assert result[1] is middle
        assert result[2] is last

    def test_sorts_nodes(self):
        """Node wrappers are sorted by their elements."""
        doc = static_dom("<p>1</p><p>2</p>")
        first, second = (Node(e) for e in doc.find_all("p"))

        assert dom_sort([second, first]) == [first, second]

    def test_empty(self):
        assert dom_sort([]) == []


class TestStaticDom:
    """Tests for static_dom and text_content."""

    def test_parses_bytes(self):
        """Raw file bytes can be parsed."""
        doc = static_dom(b'<meta charset="utf-8"><p>caf\xc3\xa9</p>')

        assert doc.p.get_text() == "café"

    def test_text_content_of_html_element(self):
        """Text of the whole <html> element, head included."""
        doc = static_dom(
            "<html><head><title>T</title></head><body><p>B</p></body></html>")

        assert text_content(doc) == "TB"

    def test_text_content_without_html_element(self):
        """Fragments without <html> still have text."""
        doc = static_dom("<body><p>Hello world</p></body>")

        assert text_content(doc) == "Hello world"

"""
DOM helpers over BeautifulSoup trees.

Measures inline text and link density, sorts elements into document
order, and parses static markup. Nothing here executes scripts.
"""

import re
from typing import Callable, Iterable, Iterator, TypeVar

from bs4 import BeautifulSoup, NavigableString, PageElement, Tag
from bs4.element import PreformattedString

T = TypeVar("T")

# Elements whose text does not count as inline text of their parent
BLOCK_TAGS = frozenset({
    "address", "blockquote", "body", "center", "dir", "div", "dl",
    "fieldset", "form", "h1", "h2", "h3", "h4", "h5", "h6", "hr",
    "isindex", "menu", "noframes", "noscript", "ol", "p", "pre", "table",
    "ul", "dd", "dt", "frameset", "li", "tbody", "td", "tfoot", "th",
    "thead", "tr", "html",
})

# Never contain human-readable text
NON_TEXT_TAGS = frozenset({"script", "style"})

_WHITESPACE_RUN = re.compile(r"\s{2,}")


def static_dom(markup: bytes | str) -> BeautifulSoup:
    """Parse markup into a document without running any scripts."""
    return BeautifulSoup(markup, "html.parser")


def is_block(node: PageElement) -> bool:
    """Check if a node is a block-level element."""
    return isinstance(node, Tag) and node.name in BLOCK_TAGS


def is_text(node: PageElement) -> bool:
    """Check if a node is plain text (not a comment, doctype, CDATA...)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def is_whitespace(node: PageElement) -> bool:
    """Check if a node is a text node holding only whitespace."""
    return is_text(node) and not node.strip()


def walk(
    element: PageElement,
    should_traverse: Callable[[PageElement], bool] = lambda node: True,
) -> Iterator[PageElement]:
    """
    Yield an element and its descendants in document order.

    The starting element is always yielded. A descendant rejected by
    should_traverse is skipped along with its whole subtree.
    """
    yield element
    if isinstance(element, Tag):
        for child in element.children:
            if should_traverse(child):
                yield from walk(child, should_traverse)


def collapse_whitespace(text: str) -> str:
    """Replace runs of 2 or more whitespace characters with one space."""
    return _WHITESPACE_RUN.sub(" ", text)


def inline_texts(
    element: Tag,
    should_traverse: Callable[[PageElement], bool] | None = None,
) -> list[str]:
    """
    Return the text nodes directly inside an element or its inline children.

    Block-level children are not descended into, so a <div> wrapping
    paragraphs has no inline text of its own.
    """
    def traverse(node: PageElement) -> bool:
        if is_block(node) or (isinstance(node, Tag) and node.name in NON_TEXT_TAGS):
            return False
        return should_traverse is None or should_traverse(node)

    return [str(node) for node in walk(element, traverse) if is_text(node)]


def inline_text_length(
    element: Tag,
    should_traverse: Callable[[PageElement], bool] | None = None,
) -> int:
    """Total whitespace-collapsed length of an element's inline text."""
    return sum(
        len(collapse_whitespace(text))
        for text in inline_texts(element, should_traverse)
    )


def link_density(element: Tag, inline_length: int | None = None) -> float:
    """
    Return the fraction of an element's inline text that sits inside links.

    Args:
        element: Element to measure
        inline_length: Previously computed inline_text_length(element), to
            avoid walking the element twice

    Returns:
        A value in [0, 1]. An element without inline text has density 0.
    """
    if inline_length is None:
        inline_length = inline_text_length(element)
    if inline_length <= 0:
        return 0.0

    length_without_links = inline_text_length(
        element,
        lambda node: not (isinstance(node, Tag) and node.name == "a"),
    )
    return (inline_length - length_without_links) / inline_length


def root_of(element: PageElement) -> PageElement:
    """Return the top of the tree an element belongs to."""
    while element.parent is not None:
        element = element.parent
    return element


def document_positions(root: PageElement) -> dict[int, int]:
    """
    Map every node under root (root included) to its pre-order index.

    Keys are id() of the nodes: bs4 tags compare by markup, so two
    identical paragraphs would collide as dict keys.
    """
    positions = {id(root): 0}
    if isinstance(root, Tag):
        for index, node in enumerate(root.descendants, start=1):
            positions[id(node)] = index
    return positions


def _element_of(item: object) -> PageElement:
    """Accept bare elements or wrappers exposing an .element attribute."""
    if isinstance(item, PageElement):
        return item
    return item.element  # type: ignore[attr-defined]


def dom_sort(items: Iterable[T]) -> list[T]:
    """
    Sort elements (or nodes wrapping them) into document order.

    The sort is stable. All items must belong to the same document.
    """
    items = list(items)
    if not items:
        return items

    positions = document_positions(root_of(_element_of(items[0])))
    return sorted(items, key=lambda item: positions[id(_element_of(item))])


def text_content(document: BeautifulSoup) -> str:
    """Return the concatenated text of an entire document."""
    html = document.find("html")
    return (html if html is not None else document).get_text()

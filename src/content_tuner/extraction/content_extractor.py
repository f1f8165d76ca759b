"""
Main content extraction by scoring and clustering text blocks.

Finds the body text of a page the way a person does by hand: look for
balls of text, prefer ones that aren't mostly links, and expect them to
sit near each other in the tree. Every weight in that process is a
coefficient, so the whole pipeline can be tuned against a corpus.
"""

import math
import numbers
from dataclasses import astuple, dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator, Sequence

from bs4 import BeautifulSoup, Tag

from content_tuner.config.settings import BASELINE_COEFFICIENTS
from content_tuner.core.exceptions import ConfigurationError, ExtractionError
from content_tuner.extraction.clustering import (
    SPLITTING_DISTANCE,
    ClusterCosts,
    top_totaling_cluster,
)
from content_tuner.extraction.dom import dom_sort, inline_text_length, link_density
from content_tuner.utils.logging import get_logger
from content_tuner.utils.metrics import time_extraction

logger = get_logger(__name__)

# Elements that can hold a block of body text
CANDIDATE_TAGS = [
    "p", "div", "li", "code", "blockquote", "pre",
    "h1", "h2", "h3", "h4", "h5", "h6",
]


@dataclass(frozen=True)
class Coefficients:
    """
    The tunable weights of the extraction pipeline.

    Field order is the order of the flat coefficient vector the tuner
    works on. Any real value is legal, including zero and negatives.
    """

    link_density: float = BASELINE_COEFFICIENTS[0]
    paragraph_tag: float = BASELINE_COEFFICIENTS[1]
    length: float = BASELINE_COEFFICIENTS[2]
    different_depth: float = BASELINE_COEFFICIENTS[3]
    different_tag: float = BASELINE_COEFFICIENTS[4]
    same_tag: float = BASELINE_COEFFICIENTS[5]
    stride: float = BASELINE_COEFFICIENTS[6]

    @classmethod
    def from_sequence(cls, values: Sequence[Any]) -> "Coefficients":
        """
        Build coefficients from a flat vector.

        Raises:
            ConfigurationError: If the vector has the wrong length or holds
                anything but real numbers
        """
        if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
            raise ConfigurationError(
                "Coefficients must be a sequence of numbers",
                details={"type": type(values).__name__},
            )

        expected = len(BASELINE_COEFFICIENTS)
        if len(values) != expected:
            raise ConfigurationError(
                f"Expected {expected} coefficients",
                details={"got": len(values)},
            )

        for index, value in enumerate(values):
            if (
                isinstance(value, bool)
                or not isinstance(value, numbers.Real)
                or math.isnan(value)
            ):
                raise ConfigurationError(
                    "Coefficients must be real numbers",
                    details={"index": index, "value": value},
                )

        return cls(*(float(value) for value in values))

    def as_tuple(self) -> tuple[float, ...]:
        return astuple(self)

    def cluster_costs(self) -> ClusterCosts:
        """Clustering weights, with the fixed splitting distance."""
        return ClusterCosts(
            different_depth_cost=self.different_depth,
            different_tag_cost=self.different_tag,
            same_tag_cost=self.same_tag,
            stride_cost=self.stride,
            splitting_distance=SPLITTING_DISTANCE,
        )


class NodeType(str, Enum):
    """Classifications the pipeline assigns to nodes."""

    PARAGRAPHISH = "paragraphish"  # plausibly a block of body text
    CONTENT = "content"  # member of the winning cluster


@dataclass(eq=False)
class Node:
    """
    A document element plus what the pipeline has learned about it.

    Each type the node has been given carries a score and, optionally, a
    note: arbitrary data cached by one stage for a later one.
    """

    element: Tag
    scores: dict[NodeType, float] = field(default_factory=dict)
    notes: dict[NodeType, Any] = field(default_factory=dict)

    def has_type(self, node_type: NodeType) -> bool:
        return node_type in self.scores

    def score_for(self, node_type: NodeType) -> float:
        return self.scores[node_type]

    def note_for(self, node_type: NodeType) -> Any:
        return self.notes.get(node_type)

    @property
    def text(self) -> str:
        return self.element.get_text()


class NodeSet:
    """
    Every node one extraction run knows about, one per element.

    Nodes keep the order in which they were first seen.
    """

    def __init__(self, document: BeautifulSoup) -> None:
        self.document = document
        self._nodes: dict[int, Node] = {}

    def node_for(self, element: Tag) -> Node:
        """Get the node wrapping an element, creating it if needed."""
        node = self._nodes.get(id(element))
        if node is None:
            node = Node(element)
            self._nodes[id(element)] = node
        return node

    def of_type(self, node_type: NodeType) -> list[Node]:
        return [node for node in self._nodes.values() if node.has_type(node_type)]

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)


Stage = Callable[[NodeSet], NodeSet]


class ContentExtractor:
    """
    Extracts the nodes holding a document's main textual content.

    Runs an ordered list of stages over a NodeSet:
    1. Score block elements on inline text length -> paragraphish
    2. Scale paragraphish scores down by link density
    3. Bonus for literal <p> tags
    4. Cluster paragraphish nodes; the top-scoring cluster -> content
    5. Sort content into document order

    The coefficients are bound at construction and never change, so one
    instance always gives the same answer for the same document.

    Example:
        >>> extractor = ContentExtractor(Coefficients())
        >>> nodes = extractor(static_dom(html))
        >>> text = "\\n".join(node.text for node in nodes)
    """

    def __init__(self, coefficients: Coefficients | None = None) -> None:
        self.coefficients = coefficients if coefficients is not None else Coefficients()
        self._cluster_costs = self.coefficients.cluster_costs()
        self.stages: list[Stage] = [
            self.score_by_length,
            self.penalize_link_density,
            self.reward_paragraph_tags,
            self.cluster_content,
        ]

    def __call__(self, document: BeautifulSoup) -> list[Node]:
        """Return the content nodes of a document, in document order."""
        facts = self.run(document)
        return dom_sort(facts.of_type(NodeType.CONTENT))

    def run(self, document: BeautifulSoup) -> NodeSet:
        """
        Run every stage and return all the facts learned.

        Raises:
            ExtractionError: If document is not a parsed tree
        """
        if not isinstance(document, Tag):
            raise ExtractionError(
                "Can only extract from a parsed document",
                details={"type": type(document).__name__},
            )

        facts = NodeSet(document)
        with time_extraction():
            for stage in self.stages:
                facts = stage(facts)
        logger.debug(
            f"Extraction found {len(facts.of_type(NodeType.PARAGRAPHISH))} "
            f"paragraphish and {len(facts.of_type(NodeType.CONTENT))} content nodes"
        )
        return facts

    def score_by_length(self, facts: NodeSet) -> NodeSet:
        """
        Score block elements on how much text sits directly inside them.

        Body text always has a lot of text, whatever the rest of the markup
        looks like. The raw length is noted for the link density stage.
        """
        for element in facts.document.find_all(CANDIDATE_TAGS):
            length = inline_text_length(element)
            node = facts.node_for(element)
            node.scores[NodeType.PARAGRAPHISH] = length * self.coefficients.length
            node.notes[NodeType.PARAGRAPHISH] = length
        return facts

    def penalize_link_density(self, facts: NodeSet) -> NodeSet:
        """Scale scores by inverse link density to sink nav bars and footers."""
        for node in facts.of_type(NodeType.PARAGRAPHISH):
            density = link_density(node.element, node.note_for(NodeType.PARAGRAPHISH))
            node.scores[NodeType.PARAGRAPHISH] *= (
                (1 - density) * self.coefficients.link_density)
        return facts

    def reward_paragraph_tags(self, facts: NodeSet) -> NodeSet:
        """Give a flat bonus to <p> elements."""
        for node in facts.of_type(NodeType.PARAGRAPHISH):
            if node.element.name == "p":
                node.scores[NodeType.PARAGRAPHISH] += self.coefficients.paragraph_tag
        return facts

    def cluster_content(self, facts: NodeSet) -> NodeSet:
        """Mark the members of the top-scoring cluster as content."""
        winners = top_totaling_cluster(
            facts.of_type(NodeType.PARAGRAPHISH),
            lambda node: node.score_for(NodeType.PARAGRAPHISH),
            self._cluster_costs,
        )
        for node in winners:
            node.scores[NodeType.CONTENT] = node.score_for(NodeType.PARAGRAPHISH)
        return facts


def build_extractor(
    coefficients: Coefficients | Sequence[float] | None = None,
) -> ContentExtractor:
    """
    Build an extractor bound to a coefficient vector.

    Args:
        coefficients: Coefficients, a flat vector of 7 numbers, or None for
            the baseline

    Returns:
        A callable mapping a parsed document to its content nodes

    Raises:
        ConfigurationError: If a flat vector is malformed
    """
    if coefficients is None:
        coefficients = Coefficients()
    elif not isinstance(coefficients, Coefficients):
        coefficients = Coefficients.from_sequence(coefficients)
    return ContentExtractor(coefficients)

"""
Tree-distance clustering of document elements.

Groups elements that sit close together in the DOM, the way a person
scanning a page sees adjacent paragraphs as one block of body text.
Closeness is the cost of walking the tree from one element to the other.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Sequence, TypeVar

from bs4 import PageElement, Tag

from content_tuner.extraction.dom import document_positions, is_whitespace, root_of
from content_tuner.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# Clusters are never merged across a distance of this or more
SPLITTING_DISTANCE = 3.0


@dataclass(frozen=True)
class ClusterCosts:
    """
    Weights of the tree traversal cost between two elements.

    Any real value is accepted. A zero weight switches its term off.

    Attributes:
        different_depth_cost: Per level where one path has run out while
            the other still descends
        different_tag_cost: Per level where the two paths pass through
            elements with different tag names
        same_tag_cost: Per level where both paths pass through the same
            tag name
        stride_cost: Per non-whitespace sibling lying between the two paths
            at a level
        splitting_distance: Clusters at this distance or more stay apart
    """

    different_depth_cost: float = 2.0
    different_tag_cost: float = 2.0
    same_tag_cost: float = 1.0
    stride_cost: float = 1.0
    splitting_distance: float = SPLITTING_DISTANCE


def _contains(ancestor: PageElement, element: PageElement) -> bool:
    """Check if ancestor is element or one of its ancestors."""
    node: PageElement | None = element
    while node is not None:
        if node is ancestor:
            return True
        node = node.parent
    return False


def _tag_name(element: PageElement) -> str | None:
    return element.name if isinstance(element, Tag) else None


def num_strides(left: PageElement | None, right: PageElement | None) -> int:
    """
    Count the non-whitespace siblings between two elements.

    If either side is missing (the paths are of different depths), count
    every sibling on the open side of the one that is present.
    """
    if left is right:
        return 0

    count = 0
    sibling = left
    while sibling is not None:
        sibling = sibling.next_sibling
        if sibling is None or sibling is right:
            break
        if not is_whitespace(sibling):
            count += 1

    # Don't double-count when left and right are siblings
    if sibling is not right and right is not None:
        sibling = right.previous_sibling
        while sibling is not None:
            if not is_whitespace(sibling):
                count += 1
            sibling = sibling.previous_sibling

    return count


def distance(
    element_a: PageElement,
    element_b: PageElement,
    costs: ClusterCosts = ClusterCosts(),
    positions: dict[int, int] | None = None,
) -> float:
    """
    Return the cost of traversing the tree from one element to another.

    Both paths are walked down in parallel from the lowest common
    ancestor. Each level costs same_tag_cost or different_tag_cost, or
    different_depth_cost once one path is exhausted. When stride_cost is
    non-zero, intervening siblings add to the cost as well.

    Args:
        element_a: First element
        element_b: Second element, in the same document
        costs: Traversal cost weights
        positions: Pre-order positions from document_positions(), to avoid
            recomputing them for every pair

    Returns:
        0 for the same element, otherwise a cost
    """
    if element_a is element_b:
        return 0.0

    # Stacks running from each element up to the common ancestor
    a_ancestors = [element_a]
    ancestor = element_a
    while not _contains(ancestor, element_b):
        ancestor = ancestor.parent
        a_ancestors.append(ancestor)

    b_ancestors = [element_b]
    node = element_b
    while node is not ancestor:
        node = node.parent
        b_ancestors.append(node)

    # Stride counting walks siblings rightward from the left path
    if positions is None:
        positions = document_positions(root_of(element_a))
    if positions[id(element_a)] < positions[id(element_b)]:
        left, right = a_ancestors, b_ancestors
    else:
        left, right = b_ancestors, a_ancestors

    cost = 0.0
    while left or right:
        left_node = left.pop() if left else None
        right_node = right.pop() if right else None
        if left_node is None or right_node is None:
            cost += costs.different_depth_cost
        elif _tag_name(left_node) == _tag_name(right_node):
            cost += costs.same_tag_cost
        else:
            cost += costs.different_tag_cost
        if costs.stride_cost != 0:
            cost += num_strides(left_node, right_node) * costs.stride_cost

    return cost


class DistanceMatrix(Generic[T]):
    """
    Pairwise distances between clusters, merged bottom-up.

    Starts with one singleton cluster per item. Merging two clusters keeps
    the smaller of their distances to every other cluster (single linkage).
    """

    def __init__(self, items: Sequence[T], distance_fn: Callable[[T, T], float]) -> None:
        self._clusters: dict[int, list[T]] = {
            i: [item] for i, item in enumerate(items)}
        self._distances: dict[tuple[int, int], float] = {}
        self._next_id = len(items)

        ids = list(self._clusters)
        for outer, a in enumerate(ids):
            for b in ids[:outer]:
                self._distances[(b, a)] = distance_fn(
                    self._clusters[b][0], self._clusters[a][0])

    def _distance(self, a: int, b: int) -> float:
        return self._distances[(a, b) if a < b else (b, a)]

    def num_clusters(self) -> int:
        return len(self._clusters)

    def closest(self) -> tuple[int, int, float]:
        """
        Return the ids of the two closest clusters and their distance.

        The earliest pair wins ties, keeping the result deterministic.
        """
        best: tuple[int, int, float] | None = None
        for (a, b), dist in self._distances.items():
            if best is None or dist < best[2]:
                best = (a, b, dist)
        if best is None:
            raise ValueError("Need at least 2 clusters to find the closest pair")
        return best

    def merge(self, a: int, b: int) -> None:
        """Replace clusters a and b with their union."""
        merged_id = self._next_id
        self._next_id += 1

        for other in self._clusters:
            if other in (a, b):
                continue
            self._distances[(other, merged_id)] = min(
                self._distance(a, other), self._distance(b, other))

        self._distances = {
            pair: dist for pair, dist in self._distances.items()
            if a not in pair and b not in pair
        }
        self._clusters[merged_id] = self._clusters.pop(a) + self._clusters.pop(b)

    def clusters(self) -> list[list[T]]:
        return list(self._clusters.values())


def clusters(
    items: Sequence[T],
    splitting_distance: float,
    distance_fn: Callable[[T, T], float],
) -> list[list[T]]:
    """
    Partition items into clusters by agglomerative single-linkage clustering.

    The closest pair of clusters is merged until one cluster remains or
    the closest pair is at least splitting_distance apart.
    """
    if not items:
        return []

    matrix = DistanceMatrix(items, distance_fn)
    while matrix.num_clusters() > 1:
        a, b, dist = matrix.closest()
        if dist >= splitting_distance:
            break
        matrix.merge(a, b)
    return matrix.clusters()


def top_totaling_cluster(
    nodes: Sequence[T],
    score_of: Callable[[T], float],
    costs: ClusterCosts,
    element_of: Callable[[T], PageElement] = lambda node: node.element,
) -> list[T]:
    """
    Cluster nodes by tree distance and return the highest-scoring cluster.

    Args:
        nodes: Candidate nodes, all from one document
        score_of: Score of a single node; a cluster totals its members
        costs: Traversal cost weights and splitting distance
        element_of: Gets the DOM element a node wraps

    Returns:
        Members of the winning cluster (first wins ties), or [] for no nodes
    """
    if not nodes:
        return []

    positions = document_positions(root_of(element_of(nodes[0])))
    found = clusters(
        nodes,
        costs.splitting_distance,
        lambda a, b: distance(element_of(a), element_of(b), costs, positions),
    )

    best = max(found, key=lambda cluster: sum(score_of(node) for node in cluster))
    logger.debug(
        f"Clustered {len(nodes)} nodes into {len(found)} clusters; "
        f"winner has {len(best)} members"
    )
    return best

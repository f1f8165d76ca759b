"""
Tests for tree-distance clustering.
"""

import pytest

from content_tuner.extraction.clustering import (
    ClusterCosts,
    clusters,
    distance,
    num_strides,
    top_totaling_cluster,
)
from content_tuner.extraction.content_extractor import Node
from content_tuner.extraction.dom import static_dom

BASELINE_COSTS = ClusterCosts(
    different_depth_cost=6.5,
    different_tag_cost=2.0,
    same_tag_cost=0.5,
    stride_cost=0.0,
)


class TestDistance:
    """Tests for the traversal cost between two elements."""

    def test_same_element(self):
        doc = static_dom("<p>a</p>")

        assert distance(doc.p, doc.p, BASELINE_COSTS) == 0.0

    def test_siblings(self):
        """Same-tag siblings cost one same-tag step per level."""
        doc = static_dom("<div><p>a</p><p>b</p></div>")
        first, second = doc.find_all("p")

        assert distance(first, second, BASELINE_COSTS) == pytest.approx(1.0)

    def test_different_depths(self):
        """Paths of unequal length pay the depth cost for each extra level."""
        doc = static_dom("<div><p>a</p><div><p>b</p></div></div>")
        first, second = doc.find_all("p")

        # div/div + p/div + nothing/p
        assert distance(first, second, BASELINE_COSTS) == pytest.approx(0.5 + 2.0 + 6.5)

    def test_symmetric(self):
        doc = static_dom("<div><p>a</p><section><h2>b</h2></section></div>")
        p, h2 = doc.p, doc.h2

        assert distance(p, h2, BASELINE_COSTS) == distance(h2, p, BASELINE_COSTS)

    def test_ancestor(self):
        """An element and its descendant are a depth difference apart."""
        doc = static_dom("<div><p>a</p></div>")

        assert distance(doc.div, doc.p, BASELINE_COSTS) == pytest.approx(0.5 + 6.5)

    def test_stride_cost(self):
        """Siblings in between add the stride cost, whitespace excepted."""
        costs = ClusterCosts(
            different_depth_cost=6.5,
            different_tag_cost=2.0,
            same_tag_cost=0.5,
            stride_cost=1.0,
        )
        doc = static_dom("<div><p>a</p> <span>x</span> <p>b</p></div>")
        first, second = doc.find_all("p")

        assert distance(first, second, costs) == pytest.approx(2.0)

    def test_stride_cost_at_uneven_depths(self):
        """Where one path runs out, siblings on the open side are strides."""
        costs = ClusterCosts(
            different_depth_cost=6.5,
            different_tag_cost=2.0,
            same_tag_cost=0.5,
            stride_cost=1.0,
        )
        doc = static_dom("<div><i>x</i><b>y</b><p>a</p></div>")

        # div/div, then nothing/p with the two siblings before p
        assert distance(doc.div, doc.p, costs) == pytest.approx(0.5 + 6.5 + 2.0)

    def test_zero_stride_cost_ignores_strides(self):
        doc = static_dom("<div><p>a</p><span>x</span><span>y</span><p>b</p></div>")
        first, second = doc.find_all("p")

        assert distance(first, second, BASELINE_COSTS) == pytest.approx(1.0)


class TestNumStrides:
    """Tests for num_strides."""

    def test_adjacent_siblings(self):
        doc = static_dom("<div><p>a</p><p>b</p></div>")
        first, second = doc.find_all("p")

        assert num_strides(first, second) == 0

    def test_missing_right_counts_following(self):
        """With no right side, every following sibling counts."""
        doc = static_dom("<div><p>a</p><i>1</i><b>2</b></div>")

        assert num_strides(doc.p, None) == 2

    def test_missing_left_counts_preceding(self):
        """With no left side, every preceding sibling counts."""
        doc = static_dom("<div><i>1</i><b>2</b><p>a</p></div>")

        assert num_strides(None, doc.p) == 2


class TestClusters:
    """Tests for agglomerative clustering."""

    def test_splits_far_groups(self):
        result = clusters([0, 1, 2, 10, 11], 3, lambda a, b: abs(a - b))

        assert sorted(sorted(c) for c in result) == [[0, 1, 2], [10, 11]]

    def test_single_linkage_chains(self):
        """Clusters grow through their nearest members."""
        result = clusters([0, 2, 4, 6], 3, lambda a, b: abs(a - b))

        assert [sorted(c) for c in result] == [[0, 2, 4, 6]]

    def test_splitting_distance_is_exclusive(self):
        """Items exactly at the splitting distance stay apart."""
        result = clusters([0, 3], 3, lambda a, b: abs(a - b))

        assert len(result) == 2

    def test_empty(self):
        assert clusters([], 3, lambda a, b: 0) == []

    def test_single_item(self):
        assert clusters(["x"], 3, lambda a, b: 0) == [["x"]]


class TestTopTotalingCluster:
    """Tests for picking the highest-scoring cluster."""

    def test_picks_highest_total(self):
        """Many small scores can beat one big one."""
        doc = static_dom(
            "<div><p>a</p><p>b</p><p>c</p></div>"
            "<section><div><h1>big</h1></div></section>"
        )
        nodes = [Node(e) for e in doc.find_all(["p", "h1"])]
        scores = {"a": 5.0, "b": 5.0, "c": 5.0, "big": 12.0}

        winner = top_totaling_cluster(
            nodes, lambda node: scores[node.element.get_text()], BASELINE_COSTS)

        assert sorted(node.element.get_text() for node in winner) == ["a", "b", "c"]

    def test_empty(self):
        assert top_totaling_cluster([], lambda node: 0.0, BASELINE_COSTS) == []

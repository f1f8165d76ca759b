"""
Extraction module for content-tuner.

Provides main content extraction including:
- DOM measurement helpers (inline text, link density, document order)
- Tree-distance clustering
- The tunable scoring pipeline
"""

from content_tuner.extraction.dom import (
    static_dom,
    inline_text_length,
    link_density,
    dom_sort,
    text_content,
)
from content_tuner.extraction.clustering import (
    ClusterCosts,
    SPLITTING_DISTANCE,
    distance,
    clusters,
    top_totaling_cluster,
)
from content_tuner.extraction.content_extractor import (
    Coefficients,
    ContentExtractor,
    Node,
    NodeSet,
    NodeType,
    build_extractor,
)

__all__ = [
    # DOM helpers
    "static_dom",
    "inline_text_length",
    "link_density",
    "dom_sort",
    "text_content",
    # Clustering
    "ClusterCosts",
    "SPLITTING_DISTANCE",
    "distance",
    "clusters",
    "top_totaling_cluster",
    # Pipeline
    "Coefficients",
    "ContentExtractor",
    "Node",
    "NodeSet",
    "NodeType",
    "build_extractor",
]

"""
Network Analysis: aggregation, order statistics, effects and itemsets
"""
from .quantile import quantile, citation_at_quantile, mean
from .aggregator import GraphAggregator, aggregate
from .effect import (
    PREMIUM_THRESHOLD,
    PENALTY_THRESHOLD,
    summarize_edge,
    network_effect,
    classify_effect,
)
from .itemsets import (
    build_combinations,
    group_clusters,
    rank_clusters,
    top_edge_combinations,
)

__all__ = [
    "quantile",
    "citation_at_quantile",
    "mean",
    "GraphAggregator",
    "aggregate",
    "PREMIUM_THRESHOLD",
    "PENALTY_THRESHOLD",
    "summarize_edge",
    "network_effect",
    "classify_effect",
    "build_combinations",
    "group_clusters",
    "rank_clusters",
    "top_edge_combinations",
]

"""
Diversity Citation Networks

Aggregation engine that turns publication records into a weighted
co-occurrence network of classification codes and a ranking of
multi-code itemsets.

Network Model:
    Nodes: classification codes (theoretical / methodological)
    Edges: theoretical, methodological (clique expansion per record),
           cross (one per methodological-theoretical pair)
    Combinations: per-record code sets, grouped into clusters

Usage:
    from diversity_networks import RecordLoader, ExplorerParameters, NetworkService

    records = RecordLoader().load_csv("data/data_perNetwork.csv")
    params = ExplorerParameters.from_dict({"yearRange": [2010, 2019], "quantileTau": 0.5})
    result = NetworkService(records).build(params)
    print(result.summary())
"""

from .core import (
    Category,
    EffectClass,
    Record,
    NodeData,
    EdgeData,
    Combination,
    Cluster,
    FilterConfig,
    ExplorerParameters,
    select_records,
    RecordLoader,
    LoadReport,
    load_records,
    load_code_descriptions,
    normalize_code,
)
from .analysis import (
    GraphAggregator,
    quantile,
    citation_at_quantile,
    network_effect,
    classify_effect,
    rank_clusters,
    top_edge_combinations,
)
from .pipeline import NetworkService, NetworkResult, build_network, Debouncer

__all__ = [
    "Category",
    "EffectClass",
    "Record",
    "NodeData",
    "EdgeData",
    "Combination",
    "Cluster",
    "FilterConfig",
    "ExplorerParameters",
    "select_records",
    "RecordLoader",
    "LoadReport",
    "load_records",
    "load_code_descriptions",
    "normalize_code",
    "GraphAggregator",
    "quantile",
    "citation_at_quantile",
    "network_effect",
    "classify_effect",
    "rank_clusters",
    "top_edge_combinations",
    "NetworkService",
    "NetworkResult",
    "build_network",
    "Debouncer",
]

__version__ = "1.0.0"

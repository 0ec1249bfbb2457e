"""
Pipeline Result Model
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..analysis.itemsets import (
    DEFAULT_CLUSTER_LIMIT,
    DEFAULT_PAIR_LIMIT,
    rank_clusters,
    top_edge_combinations,
)
from ..core.models import (
    NO_DESCRIPTION,
    Cluster,
    Combination,
    EdgeData,
    EffectClass,
    NodeData,
    edge_key,
    normalize_code,
)


@dataclass
class NetworkResult:
    """Everything one pipeline invocation produces."""
    nodes: List[NodeData] = field(default_factory=list)
    edges: List[EdgeData] = field(default_factory=list)
    combinations: List[Combination] = field(default_factory=list)
    network_effect: float = 0.0
    effect_class: EffectClass = EffectClass.NEUTRAL
    parameters: Dict[str, Any] = field(default_factory=dict)
    selected_counts: Dict[str, int] = field(default_factory=dict)

    # -------------------------------------------------------------------------
    # Rankings
    # -------------------------------------------------------------------------

    def clusters(self, k: int = DEFAULT_CLUSTER_LIMIT) -> List[Cluster]:
        return rank_clusters(self.combinations, k)

    def top_combinations(self, k: int = DEFAULT_PAIR_LIMIT) -> List[EdgeData]:
        return top_edge_combinations(self.edges, k)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get_node(self, code: str) -> Optional[NodeData]:
        code = normalize_code(code)
        return next((n for n in self.nodes if n.id == code), None)

    def get_edge(self, a: str, b: str) -> Optional[EdgeData]:
        key = edge_key(normalize_code(a), normalize_code(b))
        return next((e for e in self.edges if e.key == key), None)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def get_statistics(self) -> Dict[str, Any]:
        node_categories = Counter(n.category.value for n in self.nodes)
        edge_types = Counter(e.type.value for e in self.edges)
        return {
            "num_nodes": len(self.nodes),
            "num_edges": len(self.edges),
            "num_combinations": len(self.combinations),
            "nodes_by_category": dict(node_categories),
            "edges_by_type": dict(edge_types),
            "selected_records": dict(self.selected_counts),
            "network_effect": self.network_effect,
            "effect_class": self.effect_class.value,
        }

    def summary(self) -> str:
        stats = self.get_statistics()
        sign = "+" if self.network_effect >= 0 else ""
        lines = [
            f"Nodes: {stats['num_nodes']}  Edges: {stats['num_edges']}  "
            f"Combinations: {stats['num_combinations']}",
            f"Network effect: {sign}{self.network_effect:.2f} ({self.effect_class.value})",
        ]
        for category, count in stats["selected_records"].items():
            lines.append(f"  {category}: {count} records selected")
        return "\n".join(lines)

    def to_dict(
        self,
        descriptions: Optional[Dict[str, str]] = None,
        cluster_limit: int = DEFAULT_CLUSTER_LIMIT,
        pair_limit: int = DEFAULT_PAIR_LIMIT,
    ) -> Dict[str, Any]:
        """Output consumed by the rendering layer; descriptions are attached when given."""
        def describe(code: str) -> Optional[str]:
            if descriptions is None:
                return None
            return descriptions.get(code, NO_DESCRIPTION)

        return {
            "nodes": [n.to_dict(describe(n.id)) for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "clusters": [c.to_dict() for c in self.clusters(cluster_limit)],
            "topCombinations": [e.to_dict() for e in self.top_combinations(pair_limit)],
            "networkEffect": self.network_effect,
            "effectClass": self.effect_class.value,
            "parameters": dict(self.parameters),
            "statistics": self.get_statistics(),
        }

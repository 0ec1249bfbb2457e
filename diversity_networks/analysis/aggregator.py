"""
Graph Aggregator

Builds the code co-occurrence network from per-category selected records.

Edge construction differs by category:
    theoretical / methodological  every unordered pair of distinct codes in
                                  the record's list (clique expansion)
    cross                         one edge per (methodological, theoretical)
                                  pair, exactly as given

Node category is decided by the first context a code is seen in; codes
arriving through cross pairs are methodological or theoretical by side.
Edges are keyed by the sorted pair; cross edges read methodological ->
theoretical.
All state lives in one GraphAggregator per run.
"""
from __future__ import annotations

import copy
import itertools
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Sequence, Set, Tuple

from ..core.models import (
    Category,
    DEFAULT_CITATION_WINDOW,
    EdgeData,
    NodeData,
    Record,
    edge_key,
)
from .effect import beta_proxy, summarize_edge
from .quantile import citation_at_quantile


# =============================================================================
# Accumulators
# =============================================================================

@dataclass
class CategoryStats:
    """Running RS sum and count for one category."""
    total: float = 0.0
    count: int = 0

    def add(self, value: float) -> None:
        self.total += value
        self.count += 1

    def merge(self, other: "CategoryStats") -> None:
        self.total += other.total
        self.count += other.count

    @property
    def mean(self) -> float:
        return self.total / self.count if self.count else 0.0


def _empty_category_stats() -> Dict[Category, CategoryStats]:
    return {category: CategoryStats() for category in Category}


@dataclass
class NodeAccumulator:
    id: str
    category: Category
    overall: CategoryStats = field(default_factory=CategoryStats)
    by_category: Dict[Category, CategoryStats] = field(default_factory=_empty_category_stats)
    years: Set[int] = field(default_factory=set)
    citations: List[int] = field(default_factory=list)

    def add(self, category: Category, rs: float, year: int, citation: int) -> None:
        self.overall.add(rs)
        self.by_category[category].add(rs)
        self.years.add(year)
        self.citations.append(citation)

    def merge(self, other: "NodeAccumulator") -> None:
        self.overall.merge(other.overall)
        for category, stats in other.by_category.items():
            self.by_category[category].merge(stats)
        self.years.update(other.years)
        self.citations.extend(other.citations)

    def snapshot(self, tau: float) -> NodeData:
        return NodeData(
            id=self.id,
            category=self.category,
            count=self.overall.count,
            avg_rs=self.overall.mean,
            avg_rs_by_category={c: stats.mean for c, stats in self.by_category.items()},
            citation_at_quantile=citation_at_quantile(self.citations, tau),
            years=tuple(sorted(self.years)),
            citations=tuple(self.citations),
        )


@dataclass
class EdgeAccumulator:
    source: str
    target: str
    edge_type: Category
    weight: float = 0.0
    count: int = 0
    betas: List[float] = field(default_factory=list)
    citations: List[int] = field(default_factory=list)

    def add(self, rs: float, citation: int) -> None:
        self.weight += rs
        self.count += 1
        self.betas.append(beta_proxy(rs))
        self.citations.append(citation)

    def merge(self, other: "EdgeAccumulator") -> None:
        self.weight += other.weight
        self.count += other.count
        self.betas.extend(other.betas)
        self.citations.extend(other.citations)


# =============================================================================
# Aggregator
# =============================================================================

class GraphAggregator:
    """
    Accumulates nodes and edges for one pipeline run.

    Usage:
        aggregator = GraphAggregator(citation_window="5years")
        for category, records in selected.items():
            aggregator.add_records(category, records)
        nodes, edges = aggregator.snapshot(tau=0.5)
    """

    def __init__(self, citation_window: str = DEFAULT_CITATION_WINDOW):
        self.logger = logging.getLogger(__name__)
        self.citation_window = citation_window
        self.nodes: Dict[str, NodeAccumulator] = {}
        self.edges: Dict[str, EdgeAccumulator] = {}
        self.records_added: Counter = Counter()

    def __len__(self) -> int:
        return len(self.nodes)

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    def add_records(self, category: Category, records: Iterable[Record]) -> None:
        for record in records:
            self.add_record(category, record)

    def add_record(self, category: Category, record: Record) -> None:
        rs = record.rs(category)
        year = record.year
        citation = record.citation(self.citation_window)
        self.records_added[category] += 1

        if category is Category.CROSS:
            for meth_code, theo_code in record.cross:
                self._upsert_node(meth_code, Category.METHODOLOGICAL).add(category, rs, year, citation)
                if theo_code == meth_code:
                    continue
                self._upsert_node(theo_code, Category.THEORETICAL).add(category, rs, year, citation)
                self._upsert_edge(meth_code, theo_code, category).add(rs, citation)
            return

        codes = record.codes(category)
        for code in codes:
            self._upsert_node(code, category).add(category, rs, year, citation)
        for a, b in itertools.combinations(codes, 2):
            self._upsert_edge(a, b, category).add(rs, citation)

    def _upsert_node(self, code: str, category: Category) -> NodeAccumulator:
        node = self.nodes.get(code)
        if node is None:
            node = NodeAccumulator(id=code, category=category)
            self.nodes[code] = node
        return node

    def _upsert_edge(self, a: str, b: str, edge_type: Category) -> EdgeAccumulator:
        key = edge_key(a, b)
        edge = self.edges.get(key)
        if edge is None:
            # Key is canonical; endpoints keep the orientation of the first insertion
            edge = EdgeAccumulator(source=a, target=b, edge_type=edge_type)
            self.edges[key] = edge
        elif edge.edge_type is not edge_type:
            self.logger.debug(f"Edge {key} keeps type {edge.edge_type.value} (also seen as {edge_type.value})")
        return edge

    # -------------------------------------------------------------------------
    # Merging
    # -------------------------------------------------------------------------

    def merge(self, other: "GraphAggregator") -> "GraphAggregator":
        """
        Add another aggregator's accumulators into this one.

        Sums, counts and year sets are order independent; on key clashes the
        node category and edge type already present here are kept, so merging
        partials in category order reproduces a sequential build.
        """
        for key, node in other.nodes.items():
            if key in self.nodes:
                self.nodes[key].merge(node)
            else:
                self.nodes[key] = copy.deepcopy(node)
        for key, edge in other.edges.items():
            if key in self.edges:
                self.edges[key].merge(edge)
            else:
                self.edges[key] = copy.deepcopy(edge)
        self.records_added.update(other.records_added)
        return self

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def snapshot(self, tau: float) -> Tuple[List[NodeData], List[EdgeData]]:
        """Immutable node and edge lists in first-insertion order."""
        nodes = [node.snapshot(tau) for node in self.nodes.values()]
        edges = [summarize_edge(edge, tau) for edge in self.edges.values()]
        return nodes, edges


def aggregate(
    selected: Mapping[Category, Sequence[Record]],
    citation_window: str = DEFAULT_CITATION_WINDOW,
) -> GraphAggregator:
    """Feed every selected record list into a fresh aggregator."""
    aggregator = GraphAggregator(citation_window)
    for category, records in selected.items():
        aggregator.add_records(category, records)
    return aggregator

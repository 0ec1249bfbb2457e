"""
Itemset Ranker

Two rankings over the same selected records:

- clusters: every record with at least two distinct codes in a category
  (two pairs for cross) yields one Combination; combinations with
  identical code sets are grouped and ranked by mean citation.
- top combinations: the network's edges (code pairs) ranked by mean
  citation, skipping edges whose mean citation is zero.

Ties keep first-seen order.
"""
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..core.models import (
    Category,
    Cluster,
    Combination,
    DEFAULT_CITATION_WINDOW,
    EdgeData,
    Record,
)

DEFAULT_CLUSTER_LIMIT = 10
DEFAULT_PAIR_LIMIT = 5
MIN_ITEMSET_SIZE = 2


def build_combination(record: Record, category: Category, citation_window: str) -> Optional[Combination]:
    # Cross records qualify by pair count, not by flattened code count
    if category is Category.CROSS and len(record.cross) < MIN_ITEMSET_SIZE:
        return None
    codes = record.flat_codes(category)
    if len(codes) < MIN_ITEMSET_SIZE:
        return None
    return Combination(
        codes=codes,
        category=category,
        citation=record.citation(citation_window),
        year=record.year,
    )


def build_combinations(
    selected: Mapping[Category, Sequence[Record]],
    citation_window: str = DEFAULT_CITATION_WINDOW,
) -> List[Combination]:
    combinations: List[Combination] = []
    for category, records in selected.items():
        for record in records:
            combination = build_combination(record, category, citation_window)
            if combination is not None:
                combinations.append(combination)
    return combinations


def group_clusters(combinations: Sequence[Combination]) -> List[Cluster]:
    """Group by code set; the first combination seen sets the cluster category."""
    groups: Dict[Tuple[str, ...], List[Combination]] = {}
    for combination in combinations:
        groups.setdefault(combination.codes, []).append(combination)

    clusters = []
    for codes, members in groups.items():
        citations = tuple(m.citation for m in members)
        clusters.append(Cluster(
            codes=codes,
            category=members[0].category,
            count=len(members),
            total_citations=float(sum(citations)),
            citations=citations,
        ))
    return clusters


def rank_clusters(combinations: Sequence[Combination], k: int = DEFAULT_CLUSTER_LIMIT) -> List[Cluster]:
    """Top ``k`` clusters by mean citation."""
    clusters = sorted(group_clusters(combinations), key=lambda c: c.avg_citations, reverse=True)
    return clusters[:max(k, 0)]


def top_edge_combinations(edges: Sequence[EdgeData], k: int = DEFAULT_PAIR_LIMIT) -> List[EdgeData]:
    """Top ``k`` code pairs by mean citation."""
    cited = [e for e in edges if e.avg_citations > 0]
    cited.sort(key=lambda e: e.avg_citations, reverse=True)
    return cited[:max(k, 0)]

"""
Effect Summarizer

The effect ("beta") of a contribution is the signed Rao-Stirling index of
the record that produced it. It is a declared proxy for a citation premium
or penalty, not an estimated coefficient.

Per edge:
    avgBeta            = mean(betas)
    avgCitations       = mean(citations)
    citationAtQuantile = quantile(citations, tau)

Network:
    effect = sum(avgBeta_e * w_e) / sum(w_e),   w_e = citationAtQuantile_e or 1
"""
from typing import TYPE_CHECKING, Sequence

import numpy as np

from ..core.models import EdgeData, EffectClass
from .quantile import citation_at_quantile, mean

if TYPE_CHECKING:
    from .aggregator import EdgeAccumulator

PREMIUM_THRESHOLD: float = 0.05
PENALTY_THRESHOLD: float = -0.05

#: Replaces a zero citation weight so that an all-zero network still averages.
MIN_EDGE_WEIGHT: float = 1.0


def beta_proxy(rs: float) -> float:
    """Effect of a single contribution."""
    return float(rs)


def summarize_edge(edge: "EdgeAccumulator", tau: float) -> EdgeData:
    """Freeze an edge accumulator into an EdgeData with its effect scalars."""
    return EdgeData(
        source=edge.source,
        target=edge.target,
        type=edge.edge_type,
        weight=edge.weight,
        count=edge.count,
        avg_beta=mean(edge.betas),
        avg_citations=mean(edge.citations),
        citation_at_quantile=citation_at_quantile(edge.citations, tau),
        betas=tuple(edge.betas),
        citations=tuple(edge.citations),
    )


def edge_weight(edge: EdgeData) -> float:
    return edge.citation_at_quantile if edge.citation_at_quantile > 0 else MIN_EDGE_WEIGHT


def network_effect(edges: Sequence[EdgeData]) -> float:
    """Citation-weighted mean of the edges' avgBeta; 0.0 without edges."""
    if not edges:
        return 0.0
    betas = np.array([e.avg_beta for e in edges], dtype=float)
    weights = np.array([edge_weight(e) for e in edges], dtype=float)
    return float(np.average(betas, weights=weights))


def classify_effect(value: float) -> EffectClass:
    if value > PREMIUM_THRESHOLD:
        return EffectClass.PREMIUM
    if value < PENALTY_THRESHOLD:
        return EffectClass.PENALTY
    return EffectClass.NEUTRAL

"""
Order statistics over citation samples.

Linear interpolation between closest ranks:

    pos  = (n - 1) * tau
    base = floor(pos)
    q    = x[base] + (pos - base) * (x[base + 1] - x[base])

Each node and edge is evaluated over its own citation list, never over the
global citation distribution.
"""
import math
from typing import Iterable


def quantile(values: Iterable[float], tau: float) -> float:
    """
    Linearly interpolated order statistic of a non-empty sample.

    Args:
        values: Sample; need not be sorted.
        tau: Quantile parameter in [0, 1].

    Raises:
        ValueError: On an empty sample or tau outside [0, 1].
    """
    ordered = sorted(values)
    if not ordered:
        raise ValueError("quantile of an empty sample is undefined")
    if not 0.0 <= tau <= 1.0:
        raise ValueError(f"tau must lie in [0, 1], got {tau}")

    pos = (len(ordered) - 1) * tau
    base = math.floor(pos)
    frac = pos - base
    if base + 1 < len(ordered):
        return float(ordered[base] + frac * (ordered[base + 1] - ordered[base]))
    return float(ordered[base])


def citation_at_quantile(values: Iterable[float], tau: float) -> float:
    """Quantile of a citation list; 0.0 for an empty list."""
    values = list(values)
    if not values:
        return 0.0
    return quantile(values, tau)


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sample."""
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)

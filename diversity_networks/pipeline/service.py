"""
Network Service

Composes selection, aggregation, effect summarization and itemset
construction into one synchronous call:

    (records, filters, citation window, tau) -> NetworkResult

Nothing is cached between calls; every build starts from the full record
set. With ``parallel=True`` the categories are aggregated on a thread pool
and the partial aggregators are merged in category order.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence

from ..analysis.aggregator import GraphAggregator, aggregate
from ..analysis.effect import classify_effect, network_effect
from ..analysis.itemsets import build_combinations
from ..core.filters import DEFAULT_QUANTILE_TAU, ExplorerParameters, FilterConfig, select_records
from ..core.models import Category, DEFAULT_CITATION_WINDOW, Record
from .models import NetworkResult


class NetworkService:
    """Builds co-occurrence networks over an immutable record set."""

    def __init__(
        self,
        records: Sequence[Record],
        parallel: bool = False,
        max_workers: Optional[int] = None,
    ) -> None:
        self.logger = logging.getLogger(__name__)
        self.records = tuple(records)
        self.parallel = parallel
        self.max_workers = max_workers

    def build(self, params: Optional[ExplorerParameters] = None) -> NetworkResult:
        """Run the full pipeline for one parameter bundle."""
        params = params or ExplorerParameters()
        selected = select_records(self.records, params.filters)

        aggregator = self._aggregate(selected, params.citation_window)
        nodes, edges = aggregator.snapshot(params.quantile_tau)
        combinations = build_combinations(selected, params.citation_window)
        effect = network_effect(edges)

        result = NetworkResult(
            nodes=nodes,
            edges=edges,
            combinations=combinations,
            network_effect=effect,
            effect_class=classify_effect(effect),
            parameters=params.to_dict(),
            selected_counts={category.value: len(records) for category, records in selected.items()},
        )
        self.logger.info(
            f"Built network: {len(nodes)} nodes, {len(edges)} edges, "
            f"{len(combinations)} combinations, effect {effect:+.3f} ({result.effect_class.value})"
        )
        return result

    def _aggregate(self, selected: Dict[Category, List[Record]], citation_window: str) -> GraphAggregator:
        if not self.parallel or len(selected) < 2:
            return aggregate(selected, citation_window)

        with ThreadPoolExecutor(max_workers=self.max_workers or len(selected)) as pool:
            futures = {
                category: pool.submit(aggregate, {category: records}, citation_window)
                for category, records in selected.items()
            }
            merged = GraphAggregator(citation_window)
            for category in selected:
                merged.merge(futures[category].result())
        return merged


def build_network(
    records: Sequence[Record],
    filters: Optional[FilterConfig] = None,
    citation_window: str = DEFAULT_CITATION_WINDOW,
    quantile_tau: float = DEFAULT_QUANTILE_TAU,
    parallel: bool = False,
) -> NetworkResult:
    """Convenience function to build a network in one call."""
    params = ExplorerParameters(
        filters=filters or FilterConfig(),
        citation_window=citation_window,
        quantile_tau=quantile_tau,
    )
    return NetworkService(records, parallel=parallel).build(params)

"""
Filter Configuration and Record Selection

Per active category, records are selected by:
    1. publication year within [year_min, year_max] and a non-empty code list
    2. |rs| >= the category threshold (magnitude, so strong penalties stay)
    3. descending |rs|
    4. the first top_n

Selections are independent per category. Parameters accept the keys used by
the rendering layer (``yearRange``, ``minRS_cross``, ``topN``,
``componentTypes``, ``citationWindow``, ``quantileTau``) as well as
snake_case. Invalid values are corrected with a warning instead of failing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union

import yaml

from .models import (
    CITATION_WINDOWS,
    Category,
    DEFAULT_CITATION_WINDOW,
    Record,
    as_float,
    as_int,
)

logger = logging.getLogger(__name__)

DEFAULT_YEAR_RANGE: Tuple[int, int] = (2010, 2019)
DEFAULT_TOP_N = 50
DEFAULT_QUANTILE_TAU = 0.50

#: Allowed parameter range; the estimator itself accepts any tau in [0, 1].
TAU_SLIDER_RANGE: Tuple[float, float] = (0.10, 0.90)


def _first(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


# =============================================================================
# Filter Configuration
# =============================================================================

@dataclass
class FilterConfig:
    """Selection criteria applied before aggregation."""
    year_range: Tuple[int, int] = DEFAULT_YEAR_RANGE
    min_rs: Dict[Category, float] = field(default_factory=dict)
    top_n: int = DEFAULT_TOP_N
    component_types: Tuple[Category, ...] = tuple(Category)
    warnings: List[str] = field(default_factory=list, compare=False, repr=False)

    def __post_init__(self) -> None:
        self._validate()

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning(message)

    def _validate(self) -> None:
        year_range = self.year_range
        bounds = tuple(year_range) if isinstance(year_range, (list, tuple)) else ()
        if len(bounds) != 2:
            self._warn(f"Year range {year_range!r} needs two bounds, using {DEFAULT_YEAR_RANGE}")
            bounds = DEFAULT_YEAR_RANGE
        low, high = as_int(bounds[0]), as_int(bounds[1])
        if low > high:
            self._warn(f"Year range {low}-{high} is reversed, using {high}-{low}")
            low, high = high, low
        self.year_range = (low, high)

        thresholds: Dict[Category, float] = {c: 0.0 for c in Category}
        for key, value in (self.min_rs or {}).items():
            category = Category.parse(key)
            if category is None:
                self._warn(f"Unknown category '{key}' in thresholds, ignoring")
                continue
            threshold = as_float(value)
            if threshold < 0:
                self._warn(f"Negative threshold {threshold} for {category.value}, using 0.0")
                threshold = 0.0
            thresholds[category] = threshold
        self.min_rs = thresholds

        self.top_n = as_int(self.top_n, DEFAULT_TOP_N)
        if self.top_n < 0:
            self._warn(f"Negative top_n {self.top_n}, using 0")
            self.top_n = 0

        active: List[Category] = []
        component_types = self.component_types
        if not isinstance(component_types, (list, tuple)):
            component_types = (component_types,)
        for value in component_types:
            category = Category.parse(value)
            if category is None:
                self._warn(f"Unknown component type '{value}', ignoring")
            elif category not in active:
                active.append(category)
        self.component_types = tuple(active)

    def threshold(self, category: Category) -> float:
        return self.min_rs.get(category, 0.0)

    def is_active(self, category: Category) -> bool:
        return category in self.component_types

    def accepts_year(self, year: int) -> bool:
        return self.year_range[0] <= year <= self.year_range[1]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FilterConfig":
        data = data or {}
        min_rs = {}
        for category in Category:
            value = _first(data, f"minRS_{category.value}", f"min_rs_{category.value}")
            if value is not None:
                min_rs[category] = value
        nested = data.get("min_rs")
        for key, value in (nested if isinstance(nested, dict) else {}).items():
            min_rs[key] = value

        component_types = _first(data, "componentTypes", "component_types", default=tuple(Category))
        if not isinstance(component_types, (list, tuple)):
            component_types = [component_types]

        return cls(
            year_range=_first(data, "yearRange", "year_range", default=DEFAULT_YEAR_RANGE),
            min_rs=min_rs,
            top_n=_first(data, "topN", "top_n", default=DEFAULT_TOP_N),
            component_types=tuple(component_types),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"yearRange": list(self.year_range)}
        for category in Category:
            result[f"minRS_{category.value}"] = self.threshold(category)
        result["topN"] = self.top_n
        result["componentTypes"] = [c.value for c in self.component_types]
        return result


# =============================================================================
# Explorer Parameters
# =============================================================================

@dataclass
class ExplorerParameters:
    """Complete parameter bundle of one pipeline invocation."""
    filters: FilterConfig = field(default_factory=FilterConfig)
    citation_window: str = DEFAULT_CITATION_WINDOW
    quantile_tau: float = DEFAULT_QUANTILE_TAU
    warnings: List[str] = field(default_factory=list, compare=False, repr=False)

    def __post_init__(self) -> None:
        self.citation_window = str(self.citation_window).strip()
        if self.citation_window not in CITATION_WINDOWS:
            message = (f"Citation window '{self.citation_window}' is not one of "
                       f"{', '.join(CITATION_WINDOWS)}; records without it count 0 citations")
            self.warnings.append(message)
            logger.warning(message)

        tau = as_float(self.quantile_tau, DEFAULT_QUANTILE_TAU)
        low, high = TAU_SLIDER_RANGE
        clamped = min(max(tau, low), high)
        if clamped != tau:
            message = f"Quantile tau {tau} outside [{low}, {high}], using {clamped}"
            self.warnings.append(message)
            logger.warning(message)
        self.quantile_tau = clamped

    @property
    def all_warnings(self) -> List[str]:
        return self.filters.warnings + self.warnings

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExplorerParameters":
        data = data or {}
        filters = data.get("filters")
        return cls(
            filters=FilterConfig.from_dict(filters if isinstance(filters, dict) else data),
            citation_window=_first(data, "citationWindow", "citation_window", default=DEFAULT_CITATION_WINDOW),
            quantile_tau=_first(data, "quantileTau", "quantile_tau", default=DEFAULT_QUANTILE_TAU),
        )

    @classmethod
    def from_yaml(cls, filepath: Union[str, Path]) -> "ExplorerParameters":
        """Load parameters from a YAML mapping with the same keys as from_dict."""
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping in {filepath}, got {type(data).__name__}")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        result = self.filters.to_dict()
        result["citationWindow"] = self.citation_window
        result["quantileTau"] = self.quantile_tau
        return result


# =============================================================================
# Selection
# =============================================================================

def select_category(records: Iterable[Record], category: Category, filters: FilterConfig) -> List[Record]:
    """Records feeding one category, strongest |rs| first."""
    threshold = filters.threshold(category)
    candidates = [
        r for r in records
        if filters.accepts_year(r.year) and r.has_codes(category) and abs(r.rs(category)) >= threshold
    ]
    candidates.sort(key=lambda r: abs(r.rs(category)), reverse=True)
    return candidates[:filters.top_n]


def select_records(records: Sequence[Record], filters: FilterConfig) -> Dict[Category, List[Record]]:
    """Independent selection for every active category, in configured order."""
    return {category: select_category(records, category, filters) for category in filters.component_types}

"""
Core Models, Filtering and Loading
"""
from .models import (
    Category,
    EffectClass,
    Record,
    NodeData,
    EdgeData,
    Combination,
    Cluster,
    CITATION_WINDOWS,
    DEFAULT_CITATION_WINDOW,
    NO_DESCRIPTION,
    normalize_code,
    edge_key,
)
from .filters import (
    FilterConfig,
    ExplorerParameters,
    select_records,
    select_category,
    TAU_SLIDER_RANGE,
)
from .loader import (
    RecordLoader,
    LoadReport,
    load_records,
    load_code_descriptions,
)

__all__ = [
    "Category",
    "EffectClass",
    "Record",
    "NodeData",
    "EdgeData",
    "Combination",
    "Cluster",
    "CITATION_WINDOWS",
    "DEFAULT_CITATION_WINDOW",
    "NO_DESCRIPTION",
    "normalize_code",
    "edge_key",
    "FilterConfig",
    "ExplorerParameters",
    "select_records",
    "select_category",
    "TAU_SLIDER_RANGE",
    "RecordLoader",
    "LoadReport",
    "load_records",
    "load_code_descriptions",
]

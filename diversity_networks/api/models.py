"""
Pydantic models for API requests and responses.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from diversity_networks.core import Category, ExplorerParameters, DEFAULT_CITATION_WINDOW, TAU_SLIDER_RANGE
from diversity_networks.core.filters import DEFAULT_QUANTILE_TAU, DEFAULT_TOP_N, DEFAULT_YEAR_RANGE
from diversity_networks.analysis.itemsets import DEFAULT_CLUSTER_LIMIT, DEFAULT_PAIR_LIMIT


class NetworkRequest(BaseModel):
    """Explorer parameters, using the field names of the rendering layer."""
    model_config = ConfigDict(populate_by_name=True)

    year_range: List[int] = Field(
        default=list(DEFAULT_YEAR_RANGE), alias="yearRange", min_length=2, max_length=2,
        description="Inclusive [min, max] publication year",
    )
    min_rs_theoretical: float = Field(default=0.0, alias="minRS_theoretical", ge=0.0)
    min_rs_methodological: float = Field(default=0.0, alias="minRS_methodological", ge=0.0)
    min_rs_cross: float = Field(default=0.0, alias="minRS_cross", ge=0.0)
    top_n: int = Field(default=DEFAULT_TOP_N, alias="topN", ge=0, description="Records kept per category")
    component_types: List[Category] = Field(
        default_factory=lambda: list(Category), alias="componentTypes",
        description="Active categories, in aggregation order",
    )
    citation_window: str = Field(default=DEFAULT_CITATION_WINDOW, alias="citationWindow")
    quantile_tau: float = Field(
        default=DEFAULT_QUANTILE_TAU, alias="quantileTau",
        ge=TAU_SLIDER_RANGE[0], le=TAU_SLIDER_RANGE[1],
    )
    include_descriptions: bool = Field(default=True, alias="includeDescriptions")

    def to_parameters(self) -> ExplorerParameters:
        return ExplorerParameters.from_dict({
            "yearRange": self.year_range,
            "minRS_theoretical": self.min_rs_theoretical,
            "minRS_methodological": self.min_rs_methodological,
            "minRS_cross": self.min_rs_cross,
            "topN": self.top_n,
            "componentTypes": [c.value for c in self.component_types],
            "citationWindow": self.citation_window,
            "quantileTau": self.quantile_tau,
        })


class ClusterRequest(NetworkRequest):
    k: int = Field(default=DEFAULT_CLUSTER_LIMIT, ge=1, description="Number of clusters returned")


class TopCombinationsRequest(NetworkRequest):
    k: int = Field(default=DEFAULT_PAIR_LIMIT, ge=1, description="Number of code pairs returned")


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    records_loaded: int
    message: str


class CodeDescription(BaseModel):
    code: str
    description: str
    known: bool


class NetworkResponse(BaseModel):
    success: bool = True
    network: Dict[str, Any]
    warnings: List[str] = Field(default_factory=list)

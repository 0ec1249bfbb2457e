"""
Network build endpoints.

Every request rebuilds the network from the full record table; the
caller is expected to debounce rapidly changing parameters.
"""

import logging
from typing import Any, Dict, List, Tuple

from fastapi import APIRouter, Depends

from diversity_networks.api.dependencies import get_descriptions, get_records
from diversity_networks.api.models import (
    ClusterRequest,
    CodeDescription,
    NetworkRequest,
    NetworkResponse,
    TopCombinationsRequest,
)
from diversity_networks.core import NO_DESCRIPTION, ExplorerParameters, Record, normalize_code
from diversity_networks.pipeline import NetworkResult, NetworkService

router = APIRouter(prefix="/api/v1", tags=["network"])
logger = logging.getLogger(__name__)


def _build(request: NetworkRequest, records: List[Record]) -> Tuple[NetworkResult, ExplorerParameters]:
    params = request.to_parameters()
    logger.info(f"Building network for {params.to_dict()}")
    return NetworkService(records).build(params), params


@router.post("/network", response_model=NetworkResponse)
def build_network(
    request: NetworkRequest,
    records: List[Record] = Depends(get_records),
    descriptions: Dict[str, str] = Depends(get_descriptions),
):
    """Nodes, edges, ranked clusters and the network effect for the given parameters."""
    result, params = _build(request, records)
    return NetworkResponse(
        network=result.to_dict(descriptions if request.include_descriptions else None),
        warnings=params.all_warnings,
    )


@router.post("/network/clusters", response_model=Dict[str, Any])
def top_clusters(request: ClusterRequest, records: List[Record] = Depends(get_records)):
    """Code-set clusters ranked by mean citation."""
    result, _ = _build(request, records)
    return {
        "success": True,
        "clusters": [c.to_dict() for c in result.clusters(request.k)],
    }


@router.post("/network/top-combinations", response_model=Dict[str, Any])
def top_combinations(request: TopCombinationsRequest, records: List[Record] = Depends(get_records)):
    """Code pairs (edges) ranked by mean citation."""
    result, _ = _build(request, records)
    return {
        "success": True,
        "combinations": [e.to_dict() for e in result.top_combinations(request.k)],
    }


@router.get("/codes/{code}", response_model=CodeDescription)
def describe_code(code: str, descriptions: Dict[str, str] = Depends(get_descriptions)):
    """Catalog description of a classification code."""
    normalized = normalize_code(code)
    description = descriptions.get(normalized)
    return CodeDescription(
        code=normalized,
        description=description or NO_DESCRIPTION,
        known=description is not None,
    )

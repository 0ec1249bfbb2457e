"""
Health check and API information endpoints.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from diversity_networks import __version__
from diversity_networks.api.dependencies import get_records
from diversity_networks.api.models import HealthResponse
from diversity_networks.core import Record

router = APIRouter(tags=["health"])


@router.get("/", response_model=Dict[str, Any])
def root():
    """Root endpoint - API information"""
    return {
        "name": "Diversity Citation Networks API",
        "version": __version__,
        "status": "running",
        "endpoints": {
            "health": "/health",
            "network": "/api/v1/network",
            "clusters": "/api/v1/network/clusters",
            "top_combinations": "/api/v1/network/top-combinations",
            "code": "/api/v1/codes/{code}",
        },
    }


@router.get("/health", response_model=HealthResponse)
def health_check(records: List[Record] = Depends(get_records)):
    """Verifies the API is running and the record table is loaded."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        records_loaded=len(records),
        message="API is running.",
    )

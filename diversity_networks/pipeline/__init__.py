"""
Pipeline Orchestration
"""
from .models import NetworkResult
from .service import NetworkService, build_network
from .debounce import Debouncer

__all__ = ["NetworkResult", "NetworkService", "build_network", "Debouncer"]

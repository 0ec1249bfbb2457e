"""
API routers.
"""
from . import health, network

__all__ = ["health", "network"]

"""
Application Settings

Environment configuration for the CLI and the API.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Application settings from environment."""

    # Inputs
    data_path: str = "data/data_perNetwork.csv"
    catalog_path: str = "data/classificationTreeJELCODE.xml"

    # Optional YAML file with default explorer parameters
    params_path: Optional[str] = None

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            data_path=os.getenv("DCN_DATA_PATH", "data/data_perNetwork.csv"),
            catalog_path=os.getenv("DCN_CATALOG_PATH", "data/classificationTreeJELCODE.xml"),
            params_path=os.getenv("DCN_PARAMS_PATH") or None,
            log_level=os.getenv("DCN_LOG_LEVEL", "INFO").upper(),
        )

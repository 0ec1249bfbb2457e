"""
FastAPI dependency injection for API routes.

Provides:
  - ``get_settings``: settings from environment, read once
  - ``get_records``: the record table, loaded once per data path
  - ``get_descriptions``: the code catalog, loaded once per catalog path

Tests replace these through ``app.dependency_overrides``.
"""

import logging
from functools import lru_cache
from typing import Dict, List

from fastapi import Depends, HTTPException

from diversity_networks.config import Settings
from diversity_networks.core import Record, RecordLoader, load_code_descriptions

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=4)
def _load_records(data_path: str) -> List[Record]:
    loader = RecordLoader()
    records = loader.load_csv(data_path)
    if not loader.report.is_clean:
        logger.warning(f"Record table loaded with issues:\n{loader.report.summary()}")
    return records


@lru_cache(maxsize=4)
def _load_descriptions(catalog_path: str) -> Dict[str, str]:
    return load_code_descriptions(catalog_path)


def get_records(settings: Settings = Depends(get_settings)) -> List[Record]:
    try:
        return _load_records(settings.data_path)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load records from {settings.data_path}: {e}")
        raise HTTPException(status_code=500, detail=f"Could not load records: {e}")


def get_descriptions(settings: Settings = Depends(get_settings)) -> Dict[str, str]:
    return _load_descriptions(settings.catalog_path)

"""FastAPI dependency injection."""

import json
import logging
from functools import lru_cache
from pathlib import Path

from src.config import Settings, settings
from src.engine.loan_products import DEFAULT_CATALOG, catalog_from_dict
from src.models.loan import LoanCatalog

logger = logging.getLogger(__name__)


def get_settings() -> Settings:
    return settings


def load_catalog(path: str) -> LoanCatalog:
    """Load the loan catalog from a JSON file, or the built-in one when no path is set."""
    if not path:
        return DEFAULT_CATALOG
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    catalog = catalog_from_dict(data)
    logger.info("Loaded %d loan products from %s", len(catalog), path)
    return catalog


@lru_cache
def _cached_catalog(path: str) -> LoanCatalog:
    return load_catalog(path)


def get_catalog() -> LoanCatalog:
    return _cached_catalog(settings.loan_catalog_path)

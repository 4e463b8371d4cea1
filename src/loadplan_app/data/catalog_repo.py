import json
import logging
import os
from functools import lru_cache
from typing import Optional

from assembly_core.catalog import Catalog

from .paths import catalog_json_path

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def load_catalog(path: Optional[str] = None) -> Catalog:
    """Load product master data from ``products-detail.json``."""
    path = path or catalog_json_path()
    if not os.path.exists(path):
        raise FileNotFoundError(f"Catalog file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in catalog file {path}: {e}") from e
    if not isinstance(payload, dict):
        raise ValueError(f"Catalog file {path} must contain an object keyed by SKU")
    catalog = Catalog.from_dict(payload)
    logger.debug("Loaded %d products from %s", len(catalog), path)
    return catalog

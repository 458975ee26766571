from __future__ import annotations

import json
import logging
import os
from typing import Optional

from pydantic import ValidationError

from .models import TransformationCatalog

logger = logging.getLogger(__name__)

STATIC_DIR = os.path.join(os.path.dirname(__file__), "static")
DEFAULT_CATALOG_PATH = os.path.join(STATIC_DIR, "transformations.json")

_catalog: Optional[TransformationCatalog] = None


class CatalogLoadError(Exception):
    """The catalog file could not be read or did not validate."""

    def __init__(self, source: str, cause: Optional[BaseException] = None):
        self.source = source
        self.cause = cause
        super().__init__(f"Failed to load data from {source}: {cause if cause else 'Unknown error'}")


def catalog_path() -> str:
    return os.getenv("CATALOG_PATH") or DEFAULT_CATALOG_PATH


def read_catalog(path: str) -> TransformationCatalog:
    """Read and validate a JSON transformation catalog.

    Raises CatalogLoadError for missing files, malformed JSON and records
    that fail validation (e.g. identical source and target).
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogLoadError(os.path.basename(path), e) from e
    try:
        catalog = TransformationCatalog.model_validate(payload)
    except ValidationError as e:
        raise CatalogLoadError(os.path.basename(path), e) from e
    logger.debug(
        "Loaded %s (version=%s, records=%d)",
        os.path.basename(path),
        catalog.version,
        len(catalog.transformations),
    )
    return catalog


def get_catalog() -> TransformationCatalog:
    """Process-wide catalog, loaded on first use."""
    global _catalog
    if _catalog is None:
        _catalog = read_catalog(catalog_path())
    return _catalog


def reload_catalog(path: Optional[str] = None) -> TransformationCatalog:
    """Re-read the catalog file and replace the process-wide snapshot.

    The previous snapshot stays in place if the new file fails to load.
    """
    global _catalog
    fresh = read_catalog(path or catalog_path())
    _catalog = fresh
    logger.info("catalog.reload", extra={"version": fresh.version})
    return fresh


def set_catalog(catalog: Optional[TransformationCatalog]) -> None:
    """Install (or with None, forget) the process-wide catalog snapshot."""
    global _catalog
    _catalog = catalog


__all__ = [
    "CatalogLoadError",
    "DEFAULT_CATALOG_PATH",
    "catalog_path",
    "get_catalog",
    "read_catalog",
    "reload_catalog",
    "set_catalog",
]

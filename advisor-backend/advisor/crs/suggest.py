from __future__ import annotations

import logging
from typing import Any, List, Optional

from catalog.loader import get_catalog
from catalog.models import TransformationCatalog

from . import messages
from .codes import is_wide_area, normalize_crs_code
from .complexity import COMPLEX, SIMPLE
from .constants import LIMITS
from .errors import NotFoundError
from .model import SuggestionResult, TransformationPath
from .resolver import PathResolver, get_resolver
from .search import find_paths

logger = logging.getLogger(__name__)


def _select_recommended(
    direct_path: Optional[TransformationPath], via_paths: List[TransformationPath]
) -> TransformationPath:
    if direct_path is not None:
        return direct_path
    if via_paths:
        return via_paths[0]  # already ranked
    return TransformationPath(steps=[], total_accuracy=messages.NO_PATH_FOUND_ACCURACY, complexity=COMPLEX)


def suggest_transformation(
    source_crs: str,
    target_crs: str,
    location: Optional[Any] = None,
    *,
    catalog: Optional[TransformationCatalog] = None,
    resolver: Optional[PathResolver] = None,
    max_steps: Optional[int] = None,
    max_paths: Optional[int] = None,
) -> SuggestionResult:
    """Recommend a chain of registered transformations from source to target CRS.

    Raises NotFoundError when no chain exists within the search bounds.
    """
    source = normalize_crs_code(source_crs)
    target = normalize_crs_code(target_crs)

    if source == target:
        return SuggestionResult(
            direct_path=None,
            via_paths=[],
            recommended=TransformationPath(
                steps=[], total_accuracy=messages.NO_TRANSFORMATION_NEEDED, complexity=SIMPLE
            ),
            warnings=[messages.SAME_CRS],
        )

    catalog = catalog if catalog is not None else get_catalog()
    resolver = resolver if resolver is not None else get_resolver()
    warnings: List[str] = []

    dep = catalog.deprecation_for(source)
    if dep is not None:
        warnings.append(messages.deprecated_crs(source, dep.note, dep.migrate_to))

    graph = resolver.graph_for(catalog)
    all_paths = find_paths(
        source,
        target,
        graph,
        max_steps=LIMITS["MAX_STEPS"] if max_steps is None else max_steps,
        max_paths=LIMITS["MAX_PATHS"] if max_paths is None else max_paths,
    )

    direct_path = next((p for p in all_paths if len(p.steps) == 1), None)
    via_paths = [p for p in all_paths if len(p.steps) > 1]

    if not all_paths:
        logger.info("no transformation path %s -> %s", source, target)
        raise NotFoundError(
            "Transformation", messages.no_path_found(source, target), source=source, target=target
        )

    recommended = _select_recommended(direct_path, via_paths)

    if location is not None and is_wide_area(location):
        warnings.append(messages.WIDE_AREA_WARNING)
    if recommended.complexity == COMPLEX:
        warnings.append(messages.COMPLEX_PATH_WARNING)

    logger.debug(
        "suggest %s -> %s: %d paths, recommended %d steps",
        source,
        target,
        len(all_paths),
        len(recommended.steps),
    )
    return SuggestionResult(
        direct_path=direct_path,
        via_paths=via_paths,
        recommended=recommended,
        warnings=warnings,
    )


__all__ = ["suggest_transformation"]

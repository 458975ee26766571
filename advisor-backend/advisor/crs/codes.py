from __future__ import annotations

from typing import Any, Mapping, Optional

from catalog.models import canonical_code

from .constants import WIDE_AREA


def normalize_crs_code(code: str) -> str:
    """``"4326"``, ``"epsg:4326"`` and ``" EPSG:4326 "`` all map to ``"EPSG:4326"``."""
    return canonical_code(code)


def _get(obj: Any, *names: str) -> Any:
    for n in names:
        if isinstance(obj, Mapping):
            if n in obj:
                return obj[n]
        elif hasattr(obj, n):
            return getattr(obj, n)
    return None


def is_wide_area(location: Optional[Any]) -> bool:
    """True when the location's bounding box spans more than the wide-area threshold.

    Accepts a mapping or an object with ``bounding_box`` (or ``boundingBox``)
    holding ``north``/``south``/``east``/``west``.
    """
    if location is None:
        return False
    bbox = _get(location, "bounding_box", "boundingBox")
    if bbox is None:
        return False
    north, south = _get(bbox, "north"), _get(bbox, "south")
    east, west = _get(bbox, "east"), _get(bbox, "west")
    if None in (north, south, east, west):
        return False
    lat_span = float(north) - float(south)
    lng_span = float(east) - float(west)
    return lat_span > WIDE_AREA["LAT_SPAN"] or lng_span > WIDE_AREA["LNG_SPAN"]


__all__ = ["is_wide_area", "normalize_crs_code"]

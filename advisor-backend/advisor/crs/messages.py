"""User-facing strings for transformation suggestions."""
from __future__ import annotations

SAME_CRS = "Source and target CRS are identical. No transformation is required."
NO_TRANSFORMATION_NEEDED = "No transformation needed"
WIDE_AREA_WARNING = (
    "The data covers a wide area; transformation accuracy may vary with position."
)
COMPLEX_PATH_WARNING = (
    "The transformation spans several steps; watch for cumulative error."
)
NO_PATH_FOUND_ACCURACY = "No transformation path found"
PRECISION_LOSS = "Watch for cumulative error"

ACCURACY_UNKNOWN = "Unknown"
ACCURACY_CUMULATIVE = "1-2m or more (cumulative error)"
ACCURACY_CM_TO_M = "a few cm to a few m"

INVERSE_SUFFIX = " (inverse)"


def deprecated_crs(code: str, note: str, migrate_to: str) -> str:
    return f"{code} is deprecated. {note} Use {migrate_to} for new data."


def no_path_found(source: str, target: str) -> str:
    return f"No transformation path from {source} to {target}"

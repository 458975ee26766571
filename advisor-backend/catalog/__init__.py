"""Transformation catalog: data models and the JSON file loader.

Modules:
 - models: pydantic records, deprecations and the catalog snapshot
 - loader: reads and validates catalog files, keeps the process-wide snapshot
"""

__all__ = [
    "models",
    "loader",
]

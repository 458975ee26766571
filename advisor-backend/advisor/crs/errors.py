from __future__ import annotations

from typing import Dict, Optional

from pydantic import ValidationError

from catalog.loader import CatalogLoadError


class NotFoundError(Exception):
    def __init__(
        self,
        resource_type: str,
        identifier: str,
        source: Optional[str] = None,
        target: Optional[str] = None,
    ):
        self.resource_type = resource_type
        self.identifier = identifier
        self.source = source
        self.target = target
        super().__init__(f"{resource_type} not found: {identifier}")


def format_error_response(error: BaseException) -> Dict[str, str]:
    """Map an exception to ``{"text", "code"}`` for API error bodies."""
    if isinstance(error, ValidationError):
        return {"text": str(error), "code": "VALIDATION_ERROR"}
    if isinstance(error, NotFoundError):
        return {"text": str(error), "code": "NOT_FOUND"}
    if isinstance(error, CatalogLoadError):
        return {"text": str(error), "code": "DATA_LOAD_ERROR"}
    return {"text": str(error), "code": "INTERNAL_ERROR"}


__all__ = ["CatalogLoadError", "NotFoundError", "format_error_response"]

from __future__ import annotations

import re
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_CODE_RE = re.compile(r"^([A-Za-z]+:)?\d+$")


class BoundingBox(BaseModel):
    north: float = Field(ge=-90, le=90)
    south: float = Field(ge=-90, le=90)
    east: float = Field(ge=-180, le=180)
    west: float = Field(ge=-180, le=180)

    @model_validator(mode="after")
    def _north_of_south(self) -> "BoundingBox":
        if self.north < self.south:
            raise ValueError("north must be >= south")
        return self


class LocationSpec(BaseModel):
    """Where the data being transformed lives. Only the bounding box affects the result."""

    model_config = ConfigDict(populate_by_name=True)

    country: Optional[str] = None
    region: Optional[str] = None
    bounding_box: Optional[BoundingBox] = Field(default=None, alias="boundingBox")


class SuggestRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source_crs: str = Field(alias="sourceCrs", description='e.g. "EPSG:4301" or "4301"')
    target_crs: str = Field(alias="targetCrs", description='e.g. "EPSG:6668" or "6668"')
    location: Optional[LocationSpec] = None

    @field_validator("source_crs", "target_crs")
    @classmethod
    def _validate_code(cls, v: str) -> str:
        v = str(v).strip()
        if not _CODE_RE.match(v):
            raise ValueError('Invalid CRS code format. Use "EPSG:4326" or "4326"')
        return v


class StepOut(BaseModel):
    source: str
    target: str
    method: str
    accuracy: str
    accuracy_tier: str
    operation_code: Optional[str] = None
    record_id: Optional[str] = None
    notes: Optional[str] = None
    is_reverse: bool = False


class PathOut(BaseModel):
    steps: List[StepOut] = Field(default_factory=list)
    total_accuracy: str
    complexity: Literal["simple", "moderate", "complex"]
    estimated_precision_loss: Optional[str] = None


_EXAMPLE_PATH = {
    "steps": [
        {
            "source": "EPSG:4301",
            "target": "EPSG:4612",
            "method": "TKY2JGD grid interpolation",
            "accuracy": "a few cm (grid interpolation)",
            "accuracy_tier": "centimeter",
            "is_reverse": False,
        },
        {
            "source": "EPSG:4612",
            "target": "EPSG:6668",
            "method": "PatchJGD crustal deformation correction",
            "accuracy": "a few cm",
            "accuracy_tier": "centimeter",
            "is_reverse": False,
        },
    ],
    "total_accuracy": "a few cm to a few m",
    "complexity": "moderate",
    "estimated_precision_loss": "Watch for cumulative error",
}


class SuggestResponse(BaseModel):
    direct_path: Optional[PathOut] = None
    via_paths: List[PathOut] = Field(default_factory=list)
    recommended: PathOut
    warnings: List[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "direct_path": None,
                "via_paths": [_EXAMPLE_PATH],
                "recommended": _EXAMPLE_PATH,
                "warnings": [
                    "EPSG:4301 is deprecated. Tokyo Datum was superseded by JGD2000 in 2002. Use EPSG:6668 for new data."
                ],
            }
        }
    )


class CatalogSummary(BaseModel):
    version: str
    records: int
    nodes: int
    hub_crs: List[str] = Field(default_factory=list)
    deprecated: List[str] = Field(default_factory=list)
    common_paths: Dict[str, List[str]] = Field(default_factory=dict)


class ReloadResponse(BaseModel):
    version: str
    rebuilt: bool

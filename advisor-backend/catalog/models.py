from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class AccuracyTier(str, Enum):
    """Coarse accuracy class of a registered transformation."""

    HIGH = "high"  # practically identical datums
    CENTIMETER = "centimeter"
    EXACT = "exact"  # pure conversion, no datum error
    METER = "meter"  # ~1 m or worse
    UNKNOWN = "unknown"


# Ordered; first match wins. Numeric values with a unit are handled before these.
_TIER_KEYWORDS = [
    (AccuracyTier.HIGH, [r"practically identical", r"high(?:ly)?[- ]accura", r"high[- ]precision"]),
    (AccuracyTier.CENTIMETER, [r"\bcm\b", r"centimet", r"\bmm\b", r"millimet", r"sub-?met(?:er|re)"]),
    (AccuracyTier.EXACT, [r"\bno error\b", r"\bexact\b", r"conversion only", r"^none$"]),
    (AccuracyTier.METER, [r"\bmet(?:er|re)s?\b", r"\b(?:few|several) m\b", r"or more"]),
]

# "15 cm", "5mm", "0.5 m", "1-2m" (the upper end of a range counts)
_VALUE_RE = re.compile(
    r"(\d+(?:\.\d+)?)(?:\s*[-~]\s*(\d+(?:\.\d+)?))?\s*"
    r"(mm|cm|millimet(?:er|re)s?|centimet(?:er|re)s?|met(?:er|re)s?|m)\b"
)

CODE_RE = re.compile(r"^([A-Za-z]+:)?\s*(\d+)$")


def _matches(tier: AccuracyTier, t: str) -> bool:
    return any(re.search(p, t) for p in dict(_TIER_KEYWORDS)[tier])


def _bound_from_text(t: str) -> Optional[float]:
    m = _VALUE_RE.search(t)
    if not m:
        return None
    value = float(m.group(2) or m.group(1))
    unit = m.group(3)
    if unit.startswith(("mm", "millimet")):
        return value / 1000.0
    if unit.startswith(("cm", "centimet")):
        return value / 100.0
    return value


def infer_tier(text: Optional[str], bound_m: Optional[float] = None) -> AccuracyTier:
    """Assign a tier to catalog data that did not declare one.

    A numeric bound is preferred over the display text. Text carrying a value
    with a unit goes through the same < 1 m / >= 1 m split.
    """
    t = (text or "").strip().lower()
    if bound_m is None and t:
        if _matches(AccuracyTier.HIGH, t):
            return AccuracyTier.HIGH
        bound_m = _bound_from_text(t)
    if bound_m is not None:
        if bound_m <= 0:
            return AccuracyTier.EXACT
        if bound_m < 1.0:
            return AccuracyTier.CENTIMETER
        return AccuracyTier.METER
    if not t:
        return AccuracyTier.UNKNOWN
    for tier, _ in _TIER_KEYWORDS:
        if _matches(tier, t):
            return tier
    return AccuracyTier.UNKNOWN


def canonical_code(code: str) -> str:
    """``"4326"`` / ``"epsg:4326"`` -> ``"EPSG:4326"``; other schemes keep their prefix."""
    raw = str(code).strip()
    m = CODE_RE.match(raw)
    if not m:
        raise ValueError(f"invalid CRS code: {code!r}")
    scheme = (m.group(1) or "EPSG:").upper()
    return f"{scheme}{m.group(2)}"


class TransformationRecord(BaseModel):
    """One directly registered conversion between two CRS codes."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(min_length=1)
    source: str = Field(alias="from")
    target: str = Field(alias="to")
    method: str
    accuracy: str = Field(default="", description="Display text, e.g. '1-2m'")
    accuracy_tier: Optional[AccuracyTier] = None
    accuracy_m: Optional[float] = Field(default=None, ge=0.0)
    reversible: bool = False
    reverse_note: Optional[str] = None
    notes: Optional[str] = None
    operation_code: Optional[str] = None
    description: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None

    @field_validator("source", "target")
    @classmethod
    def _normalize_code(cls, v: str) -> str:
        if not v or not str(v).strip():
            raise ValueError("CRS code must be non-empty")
        return canonical_code(v)

    @model_validator(mode="before")
    @classmethod
    def _fill_tier(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("accuracy_tier"):
            data = dict(data)
            data["accuracy_tier"] = infer_tier(data.get("accuracy"), data.get("accuracy_m"))
        return data

    @model_validator(mode="after")
    def _distinct_endpoints(self) -> "TransformationRecord":
        if self.source == self.target:
            raise ValueError(f"record {self.id}: source and target are both {self.source}")
        return self


class DeprecationInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    note: str
    migrate_to: str = Field(alias="migrateTo")


class CommonPath(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description: str
    steps: List[str]
    total_accuracy: str = Field(alias="totalAccuracy")
    notes: Optional[str] = None


class TransformationCatalog(BaseModel):
    """Immutable snapshot of the transformation catalog, identified by ``version``."""

    model_config = ConfigDict(populate_by_name=True)

    version: str = Field(min_length=1)
    transformations: List[TransformationRecord] = Field(default_factory=list)
    deprecated: Dict[str, DeprecationInfo] = Field(default_factory=dict, alias="deprecatedTransformations")
    hub_crs: List[str] = Field(default_factory=list, alias="hubCrs")
    common_paths: Dict[str, CommonPath] = Field(default_factory=dict, alias="commonPaths")

    @field_validator("deprecated")
    @classmethod
    def _normalize_deprecated_keys(cls, v: Dict[str, DeprecationInfo]) -> Dict[str, DeprecationInfo]:
        return {canonical_code(k): info for k, info in v.items()}

    @field_validator("hub_crs")
    @classmethod
    def _normalize_hubs(cls, v: List[str]) -> List[str]:
        return [canonical_code(c) for c in v]

    def deprecation_for(self, code: str) -> Optional[DeprecationInfo]:
        return self.deprecated.get(code)


__all__ = [
    "AccuracyTier",
    "CommonPath",
    "DeprecationInfo",
    "TransformationCatalog",
    "TransformationRecord",
    "canonical_code",
    "infer_tier",
]

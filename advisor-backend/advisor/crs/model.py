from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from catalog.models import AccuracyTier


@dataclass(frozen=True)
class TransformationStep:
    source: str
    target: str
    method: str
    accuracy: str  # display text
    accuracy_tier: AccuracyTier
    operation_code: Optional[str] = None
    record_id: Optional[str] = None
    notes: Optional[str] = None
    is_reverse: bool = False


@dataclass
class TransformationPath:
    steps: List[TransformationStep]
    total_accuracy: str
    complexity: str  # simple | moderate | complex
    estimated_precision_loss: Optional[str] = None


@dataclass
class SuggestionResult:
    direct_path: Optional[TransformationPath]
    via_paths: List[TransformationPath]
    recommended: TransformationPath
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        # Enum -> plain string for JSON
        for p in [d["direct_path"], d["recommended"], *d["via_paths"]]:
            if not p:
                continue
            for s in p["steps"]:
                s["accuracy_tier"] = AccuracyTier(s["accuracy_tier"]).value
        return d


__all__ = ["TransformationStep", "TransformationPath", "SuggestionResult"]

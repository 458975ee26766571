from __future__ import annotations

from typing import Optional

from . import messages
from .constants import MODERATE_MAX_STEPS, SIMPLE_MAX_STEPS

SIMPLE = "simple"
MODERATE = "moderate"
COMPLEX = "complex"


def classify_complexity(step_count: int) -> str:
    if step_count <= SIMPLE_MAX_STEPS:
        return SIMPLE
    if step_count <= MODERATE_MAX_STEPS:
        return MODERATE
    return COMPLEX


def precision_loss_note(step_count: int) -> Optional[str]:
    return messages.PRECISION_LOSS if step_count > 1 else None


__all__ = ["SIMPLE", "MODERATE", "COMPLEX", "classify_complexity", "precision_loss_note"]

from __future__ import annotations

from typing import Sequence

from catalog.models import AccuracyTier

from . import messages
from .constants import ACCURACY_PRIORITY
from .model import TransformationStep

# Error classes used when several steps are chained.
LARGE = "large"
CENTIMETER = "centimeter"
NO_ERROR = "no_error"
UNKNOWN = "unknown"

_ERROR_CLASS = {
    AccuracyTier.METER: LARGE,
    AccuracyTier.HIGH: CENTIMETER,
    AccuracyTier.CENTIMETER: CENTIMETER,
    AccuracyTier.EXACT: NO_ERROR,
    AccuracyTier.UNKNOWN: UNKNOWN,
}


def accuracy_priority(tier: AccuracyTier) -> int:
    return ACCURACY_PRIORITY.get(tier, ACCURACY_PRIORITY[AccuracyTier.UNKNOWN])


def worst_priority(steps: Sequence[TransformationStep]) -> int:
    if not steps:
        return 0
    return max(accuracy_priority(s.accuracy_tier) for s in steps)


def aggregate_accuracy(steps: Sequence[TransformationStep]) -> str:
    """Reduce per-step accuracy to one descriptor, worst case wins."""
    if not steps:
        return messages.NO_TRANSFORMATION_NEEDED
    if len(steps) == 1:
        return steps[0].accuracy

    classes = [_ERROR_CLASS.get(s.accuracy_tier, UNKNOWN) for s in steps]
    if LARGE in classes:
        return messages.ACCURACY_CUMULATIVE
    if CENTIMETER in classes:
        return messages.ACCURACY_CM_TO_M
    if all(c == NO_ERROR for c in classes):
        return steps[0].accuracy
    return messages.ACCURACY_UNKNOWN


__all__ = ["accuracy_priority", "aggregate_accuracy", "worst_priority"]

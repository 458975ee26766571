from __future__ import annotations

import os

from catalog.models import AccuracyTier

DEFAULT_LIMITS = {
    "MAX_STEPS": 4,
    "MAX_PATHS": 10,
}

DEFAULT_WIDE_AREA = {
    "LAT_SPAN": 3.0,  # degrees
    "LNG_SPAN": 5.0,
}

# Lower is more accurate. Ordering follows the catalog authors' ranking.
ACCURACY_PRIORITY = {
    AccuracyTier.HIGH: 1,
    AccuracyTier.CENTIMETER: 2,
    AccuracyTier.EXACT: 3,
    AccuracyTier.METER: 4,
    AccuracyTier.UNKNOWN: 5,
}

SIMPLE_MAX_STEPS = 1
MODERATE_MAX_STEPS = 2


def _load_limits() -> dict:
    lim = dict(DEFAULT_LIMITS)
    # Allow overrides like PATH_MAX_STEPS=5
    for k in list(lim.keys()):
        env_key = f"PATH_{k}"
        if env_key in os.environ:
            try:
                v = int(os.environ[env_key])
            except ValueError:
                continue
            if v >= 1:
                lim[k] = v
    return lim


def _load_wide_area() -> dict:
    w = dict(DEFAULT_WIDE_AREA)
    for k in list(w.keys()):
        env_key = f"WIDE_AREA_{k}"
        if env_key in os.environ:
            try:
                w[k] = float(os.environ[env_key])
            except ValueError:
                pass
    return w


LIMITS = _load_limits()
WIDE_AREA = _load_wide_area()


__all__ = [
    "ACCURACY_PRIORITY",
    "LIMITS",
    "MODERATE_MAX_STEPS",
    "SIMPLE_MAX_STEPS",
    "WIDE_AREA",
]

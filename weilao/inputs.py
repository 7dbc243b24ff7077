from __future__ import annotations

from dataclasses import replace
from typing import Any

import numpy as np

from .models import Inputs, TEXT_FIELDS, numeric_fields

PERCENT_FIELDS = ("bc_ratio", "far", "excavate", "mech", "stair", "balcony", "roof", "common", "sell_percent")
INTEGER_FIELDS = ("floors", "basement", "roof_layers", "new_units", "owners")
DEFAULT_PARK_SIZE = 8


def parse_number(raw: Any) -> float:
    """
    Text box contents -> number. Empty or unparsable text reads as 0.
    """
    if raw is None:
        return 0.0
    if isinstance(raw, str):
        raw = raw.strip().replace(",", "")
        if raw == "":
            return 0.0
    try:
        v = float(raw)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return v if np.isfinite(v) else 0.0


def clamp_field(key: str, raw: Any):
    """
    Normalise one field the way the form does when it loses focus:
    numeric fields are non-negative, percentages are capped at 100,
    counts are floored, and a non-positive parking size becomes 8.
    """
    if key in TEXT_FIELDS:
        return "" if raw is None else str(raw)

    val = max(0.0, parse_number(raw))
    if key in PERCENT_FIELDS:
        val = min(100.0, val)
    if key in INTEGER_FIELDS:
        return int(np.floor(val))
    if key == "park_size" and val <= 0:
        return DEFAULT_PARK_SIZE
    return val


def clamp_inputs(inputs: Inputs) -> Inputs:
    changes = {k: clamp_field(k, getattr(inputs, k)) for k in numeric_fields()}
    return replace(inputs, **changes)

from __future__ import annotations

import numpy as np


def fmt_number(x, digits: int = 2) -> str:
    try:
        v = float(x)
    except (TypeError, ValueError):
        return "0"
    if not np.isfinite(v):
        return "0"
    return f"{v:,.{digits}f}"


def fmt_wan(x) -> str:
    """Currency in 萬 (units of 10,000), at most one decimal."""
    try:
        v = float(x)
    except (TypeError, ValueError):
        return "0"
    if not np.isfinite(v):
        return "0"
    w = round(v / 10000, 1)
    if w == 0:
        w = 0.0  # no "-0" for small negatives
    s = f"{w:,.1f}"
    return s[:-2] if s.endswith(".0") else s


def fmt_pct(x, digits: int = 1) -> str:
    return f"{fmt_number(x, digits)}%"


def fmt_ratio_pct(x, digits: int = 1) -> str:
    # 0.5676 -> "56.8%"
    try:
        v = float(x) * 100
    except (TypeError, ValueError):
        return "0%"
    return fmt_pct(v, digits)

from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from .engine import sensitivity_grid
from .i18n import t
from .models import Inputs, Result
from .formatting import fmt_number, fmt_wan, fmt_pct, fmt_ratio_pct

CHART_COLORS = {
    "rebuild": "#3b82f6",
    "management": "#10b981",
    "interest": "#f59e0b",
    "design": "#6366f1",
    "other": "#94a3b8",
}


def cost_chart_frame(result: Result, lang: str) -> pd.DataFrame:
    """
    Five chart buckets; empty or negative buckets are left out of the pie.
    """
    rows = [
        {"category": key, "label": t(lang, f"cat.{key}"), "value": value, "color": CHART_COLORS[key]}
        for key, value in result.costs.chart_categories()
    ]
    df = pd.DataFrame(rows, columns=["category", "label", "value", "color"])
    return df[df["value"] > 0].reset_index(drop=True)


def breakdown_frame(result: Result, lang: str) -> pd.DataFrame:
    rows = [{"key": k, "label": t(lang, f"bd.{k}"), "value": v} for k, v in result.costs.breakdown.items()]
    df = pd.DataFrame(rows)
    df["display"] = df["value"].map(fmt_wan)
    return df


def summary_rows(result: Result, lang: str):
    """(label, display) pairs per dashboard card, also used by the report."""
    a, s, c, r, e = result.areas, result.sales, result.costs, result.revenue, result.equity
    wan = t(lang, "unit.wan")
    ping = t(lang, "unit.ping")
    m2 = t(lang, "unit.m2")
    return {
        "areas": [
            (t(lang, "row.maxBuildArea"), f"{fmt_number(a.max_build_area)} {m2}"),
            (t(lang, "row.legalFAR"), f"{fmt_number(a.legal_far)} {m2}"),
            (t(lang, "row.bonusFAR"), f"{fmt_number(a.bonus_far)} {m2}"),
            (t(lang, "row.mech"), f"{fmt_number(a.mech_area)} {m2}"),
            (t(lang, "row.stair"), f"{fmt_number(a.stair_area)} {m2}"),
            (t(lang, "row.balcony"), f"{fmt_number(a.balcony_area)} {m2}"),
            (t(lang, "row.roof"), f"{fmt_number(a.roof_area)} {m2}"),
            (t(lang, "row.basement"), f"{fmt_number(a.basement_area)} {m2}"),
            (t(lang, "row.totalPing"), f"{fmt_number(a.total_ping)} {ping}"),
        ],
        "sales": [
            (t(lang, "row.totalParks"), f"{fmt_number(s.total_parks, 0)} {t(lang, 'unit.cars')}"),
            (t(lang, "row.firstFloorSale"), f"{fmt_number(s.first_floor_sale)} {ping}"),
            (t(lang, "row.upperFloorSale"), f"{fmt_number(s.upper_floor_sale)} {ping}"),
            (t(lang, "row.totalSalePing"), f"{fmt_number(s.total_sale_ping)} {ping}"),
            (t(lang, "row.landEfficiency"), fmt_number(s.land_efficiency)),
        ],
        "costs": [
            (t(lang, "cat.rebuild"), f"{fmt_wan(c.rebuild_cost)} {wan}"),
            (t(lang, "cat.management"), f"{fmt_wan(c.full_mgmt_fee)} {wan}"),
            (t(lang, "cat.interest"), f"{fmt_wan(c.loan_interest)} {wan}"),
            (t(lang, "cat.design"), f"{fmt_wan(c.design_fee)} {wan}"),
            (t(lang, "cat.other"), f"{fmt_wan(c.other_fees)} {wan}"),
            (t(lang, "row.loanYears"), f"{fmt_number(c.loan_years)} {t(lang, 'unit.years')}"),
            (t(lang, "row.totalCost"), f"{fmt_wan(c.total_cost)} {wan}"),
        ],
        "revenue": [
            (t(lang, "row.parkRevenue"), f"{fmt_wan(r.park_revenue)} {wan}"),
            (t(lang, "row.firstRevenue"), f"{fmt_wan(r.first_revenue)} {wan}"),
            (t(lang, "row.upperRevenue"), f"{fmt_wan(r.upper_revenue)} {wan}"),
            (t(lang, "row.totalRevenue"), f"{fmt_wan(r.total_revenue)} {wan}"),
            (t(lang, "row.commonBurden"), fmt_pct(r.common_burden_pct)),
        ],
        "equity": [
            (t(lang, "row.sellParks"), f"{fmt_number(e.sell_parks, 0)} {t(lang, 'unit.cars')}"),
            (t(lang, "row.sellUpperPing"), f"{fmt_number(e.sell_upper_ping)} {ping}"),
            (t(lang, "row.cashBack"), f"{fmt_wan(e.cash_back)} {wan}"),
            (t(lang, "row.returnIndoor"), f"{fmt_number(e.return_indoor)} {ping}"),
            (t(lang, "row.pingExchange"), fmt_number(e.ping_exchange)),
            (t(lang, "row.returnRatio"), fmt_ratio_pct(e.return_ratio)),
        ],
    }


def audit_frame(result: Result, ccy: str = "TWD") -> pd.DataFrame:
    df = pd.DataFrame(result.audit(), columns=["section", "key", "value", "unit"])

    def _display(row) -> str:
        unit = str(row["unit"] or "")
        if unit == "ratio":
            return fmt_ratio_pct(row["value"], 2)
        if unit == "%":
            return fmt_pct(row["value"], 2)
        if unit == "TWD":
            return f"{ccy} {fmt_number(row['value'], 0)}"
        if unit == "spaces":
            return fmt_number(row["value"], 0)
        return f"{fmt_number(row['value'])} {unit}"

    df["display"] = df.apply(_display, axis=1) if not df.empty else pd.Series(dtype=str)
    return df


def sensitivity_frame(inputs: Inputs, steps: Optional[tuple] = None) -> pd.DataFrame:
    if steps is None:
        rows, cols, mat = sensitivity_grid(inputs)
    else:
        rows, cols, mat = sensitivity_grid(inputs, price_steps=steps, cost_steps=steps)
    return pd.DataFrame(np.asarray(mat), index=rows, columns=cols)

from __future__ import annotations


LOAN_RATE_PA = 0.0326
TRUST_RATE_PA = 0.004

# Months: design/permits before start, and sales/handover after topping out
PRE_BUILD_MONTHS = 6
POST_BUILD_MONTHS = 18


def loan_years(floors: float, basement: float, roof_layers: float) -> float:
    """
    Heuristic construction + sales timeline in years.
    Two months per basement level, one per floor, half a month per roof layer.
    """
    months = PRE_BUILD_MONTHS + 2 * basement + floors + 0.5 * roof_layers + POST_BUILD_MONTHS
    return months / 12


def loan_interest(rebuild_cost: float, years: float) -> float:
    # flat rate on the full rebuild cost, not amortised
    return rebuild_cost * LOAN_RATE_PA * years


def trust_fee(rebuild_cost: float, years: float) -> float:
    return rebuild_cost * TRUST_RATE_PA * years

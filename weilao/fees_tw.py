from __future__ import annotations

from typing import Dict, Tuple


# Rates on the statutory construction cost (legal FAR x legal unit cost)
DESIGN_FEE_RATE = 0.09
FUND_RATE = 0.004           # 營建基金 / construction fund levy
LICENSE_FEE_RATE = 0.001    # building licence
REVIEW_FEE_RATE = 0.0001
BONUS_APP_FEE_RATE = 0.002  # 容積獎勵 application

# Fixed amounts per new unit
PIPE_FEE_PER_UNIT = 97500.0       # water / power / gas connections
CADASTRAL_FEE_PER_UNIT = 20000.0  # 地政 registration

# Rates on the rebuild cost
STAMP_TAX_RATE = 0.001
HR_FEE_RATE = 0.05
SALES_FEE_RATE = 0.05
RISK_FEE_RATE = 0.05


def legal_cost_fees(legal_total_cost: float) -> Dict[str, float]:
    """
    Fees levied as a share of the statutory construction cost.
    """
    c = float(legal_total_cost)
    return {
        "design_fee": c * DESIGN_FEE_RATE,
        "fund": c * FUND_RATE,
        "license_fee": c * LICENSE_FEE_RATE,
        "review_fee": c * REVIEW_FEE_RATE,
        "bonus_app_fee": c * BONUS_APP_FEE_RATE,
    }


def per_unit_fees(new_units: float) -> Tuple[float, float]:
    """
    Return (pipe_fee, cadastral_fee) for the given count of new units.
    """
    n = float(new_units)
    return n * PIPE_FEE_PER_UNIT, n * CADASTRAL_FEE_PER_UNIT


def management_fees(rebuild_cost: float) -> Tuple[float, float, float]:
    """
    Return (hr, sales, risk) overhead lines, each 5% of the rebuild cost.
    """
    c = float(rebuild_cost)
    return c * HR_FEE_RATE, c * SALES_FEE_RATE, c * RISK_FEE_RATE


def stamp_tax(rebuild_cost: float) -> float:
    return float(rebuild_cost) * STAMP_TAX_RATE

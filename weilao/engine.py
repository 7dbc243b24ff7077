from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Any, List, Mapping, Sequence, Tuple, Union

import numpy as np

from .models import Inputs, Areas, Sales, Costs, CostBreakdown, Revenue, Equity, Result
from .fees_tw import legal_cost_fees, per_unit_fees, management_fees, stamp_tax
from .finance import loan_years, loan_interest, trust_fee

logger = logging.getLogger(__name__)

P = 0.3025  # ping per m2

# Exemption caps, as a share of legal FAR
MECH_CAP = 0.10
STAIR_CAP = 0.15
BALCONY_CAP = 0.10
ROOF_CAP_PER_LAYER = 0.10  # share of footprint per roof layer

BONUS_FAR_RATE = 0.5
PARKING_SHARE = 0.65       # usable share of basement for parking
FIRST_FLOOR_SHARE = 0.65
DEFAULT_PARK_SIZE = 8.0
OLD_PING_FLOOR = 0.000001

InputLike = Union[Inputs, Mapping[str, Any]]


def _safe_float(x, default=0.0) -> float:
    try:
        v = float(x)
    except (TypeError, ValueError, OverflowError):
        return float(default)
    if not np.isfinite(v):
        return float(default)
    return v


def _pct(x) -> float:
    return _safe_float(x) / 100


def _count(x, minimum: int = 0) -> float:
    return float(max(minimum, np.floor(_safe_float(x))))


def _finite(x) -> float:
    v = float(x)
    return v if np.isfinite(v) else 0.0


def _finite_all(values: Dict[str, float]) -> Dict[str, float]:
    return {k: _finite(v) for k, v in values.items()}


def _as_inputs(inputs) -> Inputs:
    if isinstance(inputs, Inputs):
        return inputs
    if isinstance(inputs, Mapping):
        return Inputs.from_dict(inputs)
    return Inputs()


# ---------- STAGE 1: AREAS ----------
def compute_areas(
    area: float,
    bc_ratio: float,
    far: float,
    excavate: float,
    basement: float,
    roof_layers: float,
    mech: float,
    stair: float,
    balcony: float,
    roof: float,
) -> Areas:
    """
    Floor areas in m2 (total also in ping).
    Ratios are fractions here (0.45, not 45). User exemption ratios are
    clamped down to the regulatory caps, never up.
    """
    max_build_area = area * bc_ratio
    legal_far = area * far
    bonus_far = legal_far * BONUS_FAR_RATE

    mech_area = min(legal_far * mech, legal_far * MECH_CAP)
    stair_area = min(legal_far * stair, legal_far * STAIR_CAP)
    balcony_area = min(legal_far * balcony, legal_far * BALCONY_CAP)

    roof_raw = max_build_area * roof * roof_layers
    roof_area = min(roof_raw, max_build_area * ROOF_CAP_PER_LAYER * roof_layers)

    excavate_area = area * excavate
    basement_area = excavate_area * basement

    total_m2 = legal_far + bonus_far + mech_area + stair_area + balcony_area + roof_area + basement_area
    total_m2 = _finite(total_m2)

    return Areas(**_finite_all({
        "max_build_area": max_build_area,
        "legal_far": legal_far,
        "bonus_far": bonus_far,
        "mech_area": mech_area,
        "stair_area": stair_area,
        "balcony_area": balcony_area,
        "roof_area": roof_area,
        "excavate_area": excavate_area,
        "basement_area": basement_area,
        "total_m2": total_m2,
        "total_ping": total_m2 * P,
    }))


# ---------- STAGE 2: SALES ----------
def compute_sales(areas: Areas, area: float, floors: float, park_size: float) -> Sales:
    basement_ping = areas.basement_area * P
    park_area_ping = basement_ping * PARKING_SHARE

    if park_size > 0:
        park_size_safe = park_size
    else:
        logger.debug("park_size %s not positive, using %s", park_size, DEFAULT_PARK_SIZE)
        park_size_safe = DEFAULT_PARK_SIZE
    total_parks = _finite(np.floor(_finite(park_area_ping / park_size_safe)))

    above_ground_ping = max(0.0, areas.total_ping - basement_ping)

    if floors > 1:
        first_floor_sale = above_ground_ping * FIRST_FLOOR_SHARE
        upper_floor_sale = max(0.0, above_ground_ping - first_floor_sale)
    else:
        first_floor_sale = above_ground_ping
        upper_floor_sale = 0.0
    total_sale_ping = first_floor_sale + upper_floor_sale

    site_ping = area * P
    land_efficiency = total_sale_ping / site_ping if site_ping > 0 else 0.0

    return Sales(**_finite_all({
        "basement_ping": basement_ping,
        "park_area_ping": park_area_ping,
        "total_parks": total_parks,
        "above_ground_ping": above_ground_ping,
        "first_floor_sale": first_floor_sale,
        "upper_floor_sale": upper_floor_sale,
        "total_sale_ping": total_sale_ping,
        "land_efficiency": land_efficiency,
    }))


# ---------- STAGE 3: COSTS ----------
def compute_costs(
    areas: Areas,
    build_cost: float,
    legal_cost: float,
    floors: float,
    basement: float,
    roof_layers: float,
    new_units: float,
    fixed_fees: Sequence[float] = (),
) -> Costs:
    """
    Construction cost, fees, finance and overhead.

    fixed_fees are the lump-sum inputs (plan, evaluation, boundary survey,
    drilling, neighbour coordination) and are summed into rights_fees.
    """
    legal_total_cost = _finite(areas.legal_far * legal_cost)
    rebuild_cost = _finite(areas.total_ping * build_cost)

    lf = _finite_all(legal_cost_fees(legal_total_cost))
    pipe_fee, cadastral_fee = per_unit_fees(new_units)

    years = _finite(loan_years(floors, basement, roof_layers))
    interest = _finite(loan_interest(rebuild_cost, years))
    stamp = _finite(stamp_tax(rebuild_cost))
    trust = _finite(trust_fee(rebuild_cost, years))

    hr_fee, sales_fee, risk_fee = management_fees(rebuild_cost)
    full_mgmt_fee = _finite(hr_fee + sales_fee + risk_fee)

    rights_fees = 0.0
    for fee in fixed_fees:
        rights_fees += fee
    rights_fees = _finite(rights_fees)

    breakdown = CostBreakdown(**_finite_all({
        "fund": lf["fund"],
        "license_fee": lf["license_fee"],
        "review_fee": lf["review_fee"],
        "bonus_app_fee": lf["bonus_app_fee"],
        "pipe_fee": pipe_fee,
        "cadastral_fee": cadastral_fee,
        "rights_fees": rights_fees,
        "stamp_tax": stamp,
        "trust_fee": trust,
    }))

    total_cost = _finite(
        rebuild_cost + lf["design_fee"] + breakdown.fund + breakdown.license_fee + breakdown.review_fee
        + breakdown.bonus_app_fee + breakdown.pipe_fee + breakdown.cadastral_fee + breakdown.rights_fees
        + interest + stamp + trust + full_mgmt_fee
    )
    other_fees = total_cost - rebuild_cost - lf["design_fee"] - interest - full_mgmt_fee

    return Costs(
        legal_total_cost=legal_total_cost,
        rebuild_cost=rebuild_cost,
        design_fee=lf["design_fee"],
        loan_years=years,
        loan_interest=interest,
        full_mgmt_fee=full_mgmt_fee,
        total_cost=total_cost,
        other_fees=_finite(other_fees),
        breakdown=breakdown,
    )


# ---------- STAGE 4: REVENUE ----------
def compute_revenue(sales: Sales, costs: Costs, park_price: float, price_1f: float, price_2f: float) -> Revenue:
    park_revenue = _finite(sales.total_parks * park_price)
    first_revenue = _finite(sales.first_floor_sale * price_1f)
    upper_revenue = _finite(sales.upper_floor_sale * price_2f)
    total_revenue = _finite(park_revenue + first_revenue + upper_revenue)

    common_burden_pct = costs.total_cost / total_revenue * 100 if total_revenue > 0 else 0.0

    return Revenue(**_finite_all({
        "park_revenue": park_revenue,
        "first_revenue": first_revenue,
        "upper_revenue": upper_revenue,
        "total_revenue": total_revenue,
        "common_burden_pct": common_burden_pct,
    }))


# ---------- STAGE 5: EQUITY ----------
def compute_equity(
    sales: Sales,
    park_price: float,
    price_2f: float,
    new_units: float,
    sell_percent: float,
    common: float,
    old_ping: float,
) -> Equity:
    """
    Owner's side of the exchange. sell_percent and common are fractions.
    Parking beyond one space per new unit, plus the agreed share of upper
    floors, is sold for cash; the rest comes back as indoor area net of
    the common-area share.
    """
    sell_parks = max(0.0, sales.total_parks - new_units)
    sell_upper_ping = _finite(sales.upper_floor_sale * sell_percent)
    cash_back = sell_parks * park_price + sell_upper_ping * price_2f

    remain_upper = max(0.0, sales.upper_floor_sale - sell_upper_ping)
    return_indoor = _finite((sales.first_floor_sale + remain_upper) * (1 - common))

    old_ping_safe = max(OLD_PING_FLOOR, old_ping)
    ping_exchange = return_indoor / old_ping_safe
    return_ratio = return_indoor / sales.total_sale_ping if sales.total_sale_ping > 0 else 0.0

    return Equity(**_finite_all({
        "sell_parks": sell_parks,
        "sell_upper_ping": sell_upper_ping,
        "cash_back": cash_back,
        "remain_upper": remain_upper,
        "return_indoor": return_indoor,
        "ping_exchange": ping_exchange,
        "return_ratio": return_ratio,
    }))


def _audit(areas: Areas, sales: Sales, costs: Costs, revenue: Revenue, equity: Equity) -> List[Dict[str, Any]]:
    b = costs.breakdown
    return [
        {"section": "Areas", "key": "Max build area", "value": areas.max_build_area, "unit": "m2"},
        {"section": "Areas", "key": "Legal FAR", "value": areas.legal_far, "unit": "m2"},
        {"section": "Areas", "key": "Bonus FAR", "value": areas.bonus_far, "unit": "m2"},
        {"section": "Areas", "key": "Mechanical exemption", "value": areas.mech_area, "unit": "m2"},
        {"section": "Areas", "key": "Stair exemption", "value": areas.stair_area, "unit": "m2"},
        {"section": "Areas", "key": "Balcony exemption", "value": areas.balcony_area, "unit": "m2"},
        {"section": "Areas", "key": "Roof structures", "value": areas.roof_area, "unit": "m2"},
        {"section": "Areas", "key": "Basement", "value": areas.basement_area, "unit": "m2"},
        {"section": "Areas", "key": "Total floor area", "value": areas.total_m2, "unit": "m2"},
        {"section": "Areas", "key": "Total floor area", "value": areas.total_ping, "unit": "ping"},

        {"section": "Sales", "key": "Parking area", "value": sales.park_area_ping, "unit": "ping"},
        {"section": "Sales", "key": "Parking spaces", "value": sales.total_parks, "unit": "spaces"},
        {"section": "Sales", "key": "Ground floor sale", "value": sales.first_floor_sale, "unit": "ping"},
        {"section": "Sales", "key": "Upper floor sale", "value": sales.upper_floor_sale, "unit": "ping"},
        {"section": "Sales", "key": "Total sale", "value": sales.total_sale_ping, "unit": "ping"},
        {"section": "Sales", "key": "Land efficiency", "value": sales.land_efficiency, "unit": "ratio"},

        {"section": "Costs", "key": "Rebuild cost", "value": costs.rebuild_cost, "unit": "TWD"},
        {"section": "Costs", "key": "Statutory construction cost", "value": costs.legal_total_cost, "unit": "TWD"},
        {"section": "Costs", "key": "Design fee", "value": costs.design_fee, "unit": "TWD"},
        {"section": "Costs", "key": "Construction fund", "value": b.fund, "unit": "TWD"},
        {"section": "Costs", "key": "Licence fee", "value": b.license_fee, "unit": "TWD"},
        {"section": "Costs", "key": "Review fee", "value": b.review_fee, "unit": "TWD"},
        {"section": "Costs", "key": "Bonus application fee", "value": b.bonus_app_fee, "unit": "TWD"},
        {"section": "Costs", "key": "Utility connections", "value": b.pipe_fee, "unit": "TWD"},
        {"section": "Costs", "key": "Cadastral fee", "value": b.cadastral_fee, "unit": "TWD"},
        {"section": "Costs", "key": "Rights fees", "value": b.rights_fees, "unit": "TWD"},
        {"section": "Costs", "key": "Stamp tax", "value": b.stamp_tax, "unit": "TWD"},
        {"section": "Costs", "key": "Trust fee", "value": b.trust_fee, "unit": "TWD"},
        {"section": "Costs", "key": "Management fee", "value": costs.full_mgmt_fee, "unit": "TWD"},
        {"section": "Finance", "key": "Loan period", "value": costs.loan_years, "unit": "years"},
        {"section": "Finance", "key": "Loan interest", "value": costs.loan_interest, "unit": "TWD"},
        {"section": "Costs", "key": "Total cost", "value": costs.total_cost, "unit": "TWD"},

        {"section": "Revenue", "key": "Parking revenue", "value": revenue.park_revenue, "unit": "TWD"},
        {"section": "Revenue", "key": "Ground floor revenue", "value": revenue.first_revenue, "unit": "TWD"},
        {"section": "Revenue", "key": "Upper floor revenue", "value": revenue.upper_revenue, "unit": "TWD"},
        {"section": "Revenue", "key": "Total revenue", "value": revenue.total_revenue, "unit": "TWD"},
        {"section": "Revenue", "key": "Common burden", "value": revenue.common_burden_pct, "unit": "%"},

        {"section": "Equity", "key": "Parking sold", "value": equity.sell_parks, "unit": "spaces"},
        {"section": "Equity", "key": "Upper floors sold", "value": equity.sell_upper_ping, "unit": "ping"},
        {"section": "Equity", "key": "Cash back", "value": equity.cash_back, "unit": "TWD"},
        {"section": "Equity", "key": "Return indoor", "value": equity.return_indoor, "unit": "ping"},
        {"section": "Equity", "key": "Ping exchange", "value": equity.ping_exchange, "unit": "x"},
        {"section": "Equity", "key": "Return ratio", "value": equity.return_ratio, "unit": "ratio"},
    ]


def compute(inputs: InputLike) -> Result:
    """
    Evaluate one input snapshot. Never raises: missing or non-numeric
    fields read as 0 and every quotient has a fallback.
    """
    a = _as_inputs(inputs)

    area = _safe_float(a.area)
    floors = _count(a.floors, 1)
    basement = _count(a.basement)
    roof_layers = _count(a.roof_layers)
    new_units = _count(a.new_units)

    areas = compute_areas(
        area=area,
        bc_ratio=_pct(a.bc_ratio),
        far=_pct(a.far),
        excavate=_pct(a.excavate),
        basement=basement,
        roof_layers=roof_layers,
        mech=_pct(a.mech),
        stair=_pct(a.stair),
        balcony=_pct(a.balcony),
        roof=_pct(a.roof),
    )
    sales = compute_sales(areas, area=area, floors=floors, park_size=_safe_float(a.park_size))
    costs = compute_costs(
        areas,
        build_cost=_safe_float(a.build_cost),
        legal_cost=_safe_float(a.legal_cost),
        floors=floors,
        basement=basement,
        roof_layers=roof_layers,
        new_units=new_units,
        fixed_fees=[
            _safe_float(a.plan_fee),
            _safe_float(a.eval_fee),
            _safe_float(a.boundary_fee),
            _safe_float(a.drill_fee),
            _safe_float(a.neighbor_fee),
        ],
    )
    revenue = compute_revenue(
        sales,
        costs,
        park_price=_safe_float(a.park_price),
        price_1f=_safe_float(a.price_1f),
        price_2f=_safe_float(a.price_2f),
    )
    equity = compute_equity(
        sales,
        park_price=_safe_float(a.park_price),
        price_2f=_safe_float(a.price_2f),
        new_units=new_units,
        sell_percent=_pct(a.sell_percent),
        common=_pct(a.common),
        old_ping=_safe_float(a.old_ping),
    )

    logger.debug(
        "computed: total_ping=%.3f total_cost=%.0f total_revenue=%.0f ping_exchange=%.4f",
        areas.total_ping, costs.total_cost, revenue.total_revenue, equity.ping_exchange,
    )
    return Result(
        areas=areas,
        sales=sales,
        costs=costs,
        revenue=revenue,
        equity=equity,
        audit_rows=tuple(_audit(areas, sales, costs, revenue, equity)),
    )


def sensitivity_grid(
    inputs: InputLike,
    price_steps=(-0.1, -0.05, 0, 0.05, 0.1),
    cost_steps=(-0.1, -0.05, 0, 0.05, 0.1),
) -> Tuple[List[str], List[str], np.ndarray]:
    """
    Common burden % with all sale prices shifted by each price step (rows)
    and the build cost shifted by each cost step (columns).
    """
    base = _as_inputs(inputs)
    rows = [f"{int(round(p*100))}%" for p in price_steps]
    cols = [f"{int(round(c*100))}%" for c in cost_steps]
    mat = np.zeros((len(rows), len(cols)))

    for i, dp in enumerate(price_steps):
        for j, dc in enumerate(cost_steps):
            aa = replace(
                base,
                park_price=_safe_float(base.park_price) * (1 + dp),
                price_1f=_safe_float(base.price_1f) * (1 + dp),
                price_2f=_safe_float(base.price_2f) * (1 + dp),
                build_cost=_safe_float(base.build_cost) * (1 + dc),
            )
            mat[i, j] = compute(aa).revenue.common_burden_pct
    return rows, cols, mat

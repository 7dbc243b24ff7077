from __future__ import annotations

from dataclasses import dataclass, field, asdict, fields
from typing import Dict, Any, List, Mapping, Tuple


# camelCase keys of the browser form's JSON shape -> dataclass field names
FIELD_ALIASES: Dict[str, str] = {
    "dihao": "lot_number",
    "diduan": "section",
    "roadwidth": "road_width",
    "bcRatio": "bc_ratio",
    "roofLayers": "roof_layers",
    "parkSize": "park_size",
    "buildCost": "build_cost",
    "legalCost": "legal_cost",
    "planFee": "plan_fee",
    "evalFee": "eval_fee",
    "boundaryFee": "boundary_fee",
    "drillFee": "drill_fee",
    "neighborFee": "neighbor_fee",
    "parkPrice": "park_price",
    "price1F": "price_1f",
    "price2F": "price_2f",
    "oldPing": "old_ping",
    "newUnits": "new_units",
    "sellPercent": "sell_percent",
}

TEXT_FIELDS: Tuple[str, ...] = ("lot_number", "section", "zoning")


@dataclass
class Inputs:
    """
    One edited snapshot of the form.

    Values are kept as supplied; the engine does its own coercion, so a
    field holding None or a bad string is read as 0 rather than rejected.
    """

    # Identification (display only)
    lot_number: str = ""
    section: str = ""
    zoning: str = ""

    # Site
    area: float = 0.0            # m2
    road_width: float = 0.0      # m
    height: float = 0.0          # m
    bc_ratio: float = 0.0        # % building coverage
    far: float = 0.0             # % floor area ratio
    excavate: float = 0.0        # % of site excavated per basement level
    floors: int = 0
    basement: int = 0
    roof_layers: int = 0

    # Exemptions (% of legal FAR, roof: % of footprint per layer)
    mech: float = 0.0
    stair: float = 0.0
    balcony: float = 0.0
    roof: float = 0.0

    # Costs
    common: float = 0.0          # % public facility share
    park_size: float = 0.0       # ping per space
    build_cost: float = 0.0      # per ping
    legal_cost: float = 0.0      # per m2 (statutory unit cost)
    plan_fee: float = 0.0
    eval_fee: float = 0.0
    boundary_fee: float = 0.0
    drill_fee: float = 0.0
    neighbor_fee: float = 0.0

    # Sales & rights
    park_price: float = 0.0      # per space
    price_1f: float = 0.0        # per ping
    price_2f: float = 0.0        # per ping
    old_ping: float = 0.0
    new_units: int = 0
    owners: int = 0
    sell_percent: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "Inputs":
        known = {f.name for f in fields(Inputs)}
        kw: Dict[str, Any] = {}
        for k, v in (d or {}).items():
            name = FIELD_ALIASES.get(k, k)
            if name in known:
                kw[name] = v
        return Inputs(**kw)


def numeric_fields() -> List[str]:
    return [f.name for f in fields(Inputs) if f.name not in TEXT_FIELDS]


def default_inputs() -> Inputs:
    # Starting values of a blank form
    return Inputs(
        road_width=8,
        common=33,
        park_size=8,
        build_cost=250000,
        park_price=2500000,
        price_1f=1000000,
        price_2f=800000,
        old_ping=30,
        new_units=10,
        owners=1,
    )


def demo_inputs() -> Inputs:
    """
    Demo site: 500 m2, 45% coverage, 225% FAR, 12 floors over 3 basements.
    Also the regression baseline for the engine tests.
    """
    base = default_inputs()
    return Inputs(**{
        **base.to_dict(),
        "area": 500,
        "bc_ratio": 45,
        "far": 225,
        "excavate": 60,
        "floors": 12,
        "basement": 3,
        "roof_layers": 2,
        "mech": 10,
        "stair": 10,
        "balcony": 10,
        "roof": 10,
        "common": 34,
        "build_cost": 280000,
        "legal_cost": 18000,
        "park_price": 3000000,
        "price_1f": 1200000,
        "price_2f": 950000,
        "old_ping": 40,
        "new_units": 12,
        "sell_percent": 40,
    })


@dataclass(frozen=True)
class Areas:
    # m2 unless the name says ping
    max_build_area: float
    legal_far: float
    bonus_far: float
    mech_area: float
    stair_area: float
    balcony_area: float
    roof_area: float
    excavate_area: float
    basement_area: float
    total_m2: float
    total_ping: float


@dataclass(frozen=True)
class Sales:
    # ping
    basement_ping: float
    park_area_ping: float
    total_parks: float
    above_ground_ping: float
    first_floor_sale: float
    upper_floor_sale: float
    total_sale_ping: float
    land_efficiency: float


@dataclass(frozen=True)
class CostBreakdown:
    fund: float
    license_fee: float
    review_fee: float
    bonus_app_fee: float
    pipe_fee: float
    cadastral_fee: float
    rights_fees: float
    stamp_tax: float
    trust_fee: float

    def items(self) -> List[Tuple[str, float]]:
        return [(f.name, float(getattr(self, f.name))) for f in fields(self)]

    def total(self) -> float:
        return float(sum(v for _, v in self.items()))


@dataclass(frozen=True)
class Costs:
    legal_total_cost: float
    rebuild_cost: float
    design_fee: float
    loan_years: float
    loan_interest: float
    full_mgmt_fee: float
    total_cost: float
    other_fees: float  # residual bucket for the chart
    breakdown: CostBreakdown

    def chart_categories(self) -> List[Tuple[str, float]]:
        """Five-bucket aggregate shown in the cost pie."""
        return [
            ("rebuild", self.rebuild_cost),
            ("management", self.full_mgmt_fee),
            ("interest", self.loan_interest),
            ("design", self.design_fee),
            ("other", self.other_fees),
        ]


@dataclass(frozen=True)
class Revenue:
    park_revenue: float
    first_revenue: float
    upper_revenue: float
    total_revenue: float
    common_burden_pct: float


@dataclass(frozen=True)
class Equity:
    sell_parks: float
    sell_upper_ping: float
    cash_back: float
    remain_upper: float
    return_indoor: float
    ping_exchange: float
    return_ratio: float

    @property
    def is_one_for_one(self) -> bool:
        return self.ping_exchange >= 1


@dataclass(frozen=True)
class Result:
    areas: Areas
    sales: Sales
    costs: Costs
    revenue: Revenue
    equity: Equity
    audit_rows: Tuple[Dict[str, Any], ...] = field(default=(), compare=False)

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out.pop("audit_rows", None)
        return out

    def audit(self) -> List[Dict[str, Any]]:
        return [dict(r) for r in self.audit_rows]

    def headline(self) -> Dict[str, Any]:
        return {
            "Ping exchange": self.equity.ping_exchange,
            "Return indoor (ping)": self.equity.return_indoor,
            "Total floor area (ping)": self.areas.total_ping,
            "Total cost": self.costs.total_cost,
            "Total revenue": self.revenue.total_revenue,
            "Common burden %": self.revenue.common_burden_pct,
            "Cash back": self.equity.cash_back,
        }

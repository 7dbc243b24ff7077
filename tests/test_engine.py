"""
Calculation engine: demo baseline, guards and invariants
"""
from dataclasses import replace

import pytest

from weilao.engine import compute, compute_areas, compute_sales, compute_costs, compute_revenue, compute_equity, P
from weilao.models import Inputs, Areas, Sales, Costs, CostBreakdown

REL = 1e-9


def approx(v):
    return pytest.approx(v, rel=REL, abs=1e-9)


class TestDemoScenario:
    """Regression baseline from the built-in demo site"""

    def test_areas(self, demo_result):
        a = demo_result.areas
        assert a.max_build_area == approx(225)
        assert a.legal_far == approx(1125)
        assert a.bonus_far == approx(562.5)
        assert a.mech_area == approx(112.5)
        assert a.stair_area == approx(112.5)
        assert a.balcony_area == approx(112.5)
        assert a.roof_area == approx(45)
        assert a.excavate_area == approx(300)
        assert a.basement_area == approx(900)
        assert a.total_m2 == approx(2970)
        assert a.total_ping == approx(898.425)

    def test_sales(self, demo_result):
        s = demo_result.sales
        assert s.basement_ping == approx(272.25)
        assert s.park_area_ping == approx(176.9625)
        assert s.total_parks == 22
        assert s.above_ground_ping == approx(626.175)
        assert s.first_floor_sale == approx(407.01375)
        assert s.upper_floor_sale == approx(219.16125)
        assert s.total_sale_ping == approx(626.175)
        assert s.land_efficiency == approx(4.14)

    def test_costs(self, demo_result):
        c = demo_result.costs
        b = c.breakdown
        assert c.legal_total_cost == approx(20_250_000)
        assert c.rebuild_cost == approx(251_559_000)
        assert c.design_fee == approx(1_822_500)
        assert b.fund == approx(81_000)
        assert b.license_fee == approx(20_250)
        assert b.review_fee == approx(2_025)
        assert b.bonus_app_fee == approx(40_500)
        assert b.pipe_fee == approx(1_170_000)
        assert b.cadastral_fee == approx(240_000)
        assert b.rights_fees == 0
        assert c.loan_years == approx(43 / 12)
        assert c.loan_interest == approx(29_386_283.85)
        assert b.stamp_tax == approx(251_559)
        assert b.trust_fee == approx(3_605_679)
        assert c.full_mgmt_fee == approx(37_733_850)
        assert c.total_cost == approx(325_912_646.85)
        assert c.other_fees == approx(5_411_013)

    def test_revenue(self, demo_result):
        r = demo_result.revenue
        assert r.park_revenue == approx(66_000_000)
        assert r.first_revenue == approx(488_416_500)
        assert r.upper_revenue == approx(208_203_187.5)
        assert r.total_revenue == approx(762_619_687.5)
        assert r.common_burden_pct == approx(325_912_646.85 / 762_619_687.5 * 100)

    def test_equity(self, demo_result):
        e = demo_result.equity
        assert e.sell_parks == 10
        assert e.sell_upper_ping == approx(87.6645)
        assert e.cash_back == approx(113_281_275)
        assert e.remain_upper == approx(131.49675)
        assert e.return_indoor == approx(355.41693)
        assert e.ping_exchange == approx(8.88542325)
        assert e.return_ratio == approx(0.5676)
        assert e.is_one_for_one

    def test_rights_fees_sum_fixed_inputs(self, demo):
        r = compute(replace(demo, plan_fee=100, eval_fee=200, boundary_fee=300, drill_fee=400, neighbor_fee=500))
        assert r.costs.breakdown.rights_fees == 1500


class TestGuards:
    """The engine is total: bad input degrades to zero, never raises"""

    def test_empty_input(self, assert_all_finite):
        r = compute(Inputs())
        assert_all_finite(r)
        assert r.areas.total_m2 == 0
        assert r.revenue.total_revenue == 0
        assert r.revenue.common_burden_pct == 0
        assert r.sales.land_efficiency == 0
        assert r.equity.ping_exchange == 0
        assert r.equity.return_ratio == 0

    def test_empty_mapping(self, assert_all_finite):
        assert_all_finite(compute({}))

    def test_none_input(self, assert_all_finite):
        assert_all_finite(compute(None))

    def test_non_numeric_fields_read_as_zero(self, demo, assert_all_finite):
        r = compute(replace(demo, area="abc", far=None, build_cost=float("nan")))
        assert_all_finite(r)
        assert r.areas.legal_far == 0
        assert r.costs.rebuild_cost == 0

    def test_numeric_strings_are_accepted(self, demo):
        r = compute(replace(demo, area="500", far="225"))
        assert r.areas.legal_far == pytest.approx(1125)

    def test_infinite_input_reads_as_zero(self, demo):
        r = compute(replace(demo, area=float("inf")))
        assert r.areas.legal_far == 0

    def test_huge_inputs_stay_finite(self, assert_all_finite):
        huge = {f: 1e308 for f in (
            "area", "bc_ratio", "far", "excavate", "floors", "basement", "roof_layers",
            "mech", "stair", "balcony", "roof", "common", "park_size", "build_cost", "legal_cost",
            "plan_fee", "eval_fee", "boundary_fee", "drill_fee", "neighbor_fee",
            "park_price", "price_1f", "price_2f", "old_ping", "new_units", "owners", "sell_percent",
        )}
        assert_all_finite(compute(huge))

    def test_huge_integer_input(self, demo, assert_all_finite):
        r = compute(replace(demo, floors=10 ** 400))
        assert_all_finite(r)

    def test_negative_inputs_stay_finite(self, demo, assert_all_finite):
        r = compute(replace(demo, area=-500, old_ping=-10, park_size=-3, floors=-2, new_units=-4))
        assert_all_finite(r)

    @pytest.mark.parametrize("park_size", [0, -1, None, "x"])
    def test_invalid_park_size_falls_back_to_eight(self, demo, park_size):
        r = compute(replace(demo, park_size=park_size))
        assert r.sales.total_parks == 22

    def test_zero_old_ping_is_floored(self, demo, assert_all_finite):
        r = compute(replace(demo, old_ping=0))
        assert_all_finite(r)
        assert r.equity.ping_exchange == pytest.approx(r.equity.return_indoor / 0.000001)

    def test_zero_area(self, demo, assert_all_finite):
        r = compute(replace(demo, area=0))
        assert_all_finite(r)
        assert r.sales.land_efficiency == 0

    def test_zero_revenue(self, demo):
        r = compute(replace(demo, park_price=0, price_1f=0, price_2f=0))
        assert r.revenue.total_revenue == 0
        assert r.revenue.common_burden_pct == 0


class TestProperties:

    def test_total_ping_is_total_m2_times_p(self, demo_result):
        assert demo_result.areas.total_ping == demo_result.areas.total_m2 * 0.3025
        assert P == 0.3025

    def test_build_cost_monotonic(self, demo):
        lo = compute(demo)
        hi = compute(replace(demo, build_cost=demo.build_cost + 1))
        assert hi.costs.rebuild_cost > lo.costs.rebuild_cost
        assert hi.costs.total_cost > lo.costs.total_cost

    @pytest.mark.parametrize("far", [0, 100, 225, 400, 800])
    def test_far_monotonic(self, demo, far):
        lo = compute(replace(demo, far=far)).areas
        hi = compute(replace(demo, far=far + 50)).areas
        assert hi.legal_far >= lo.legal_far
        assert hi.bonus_far >= lo.bonus_far
        assert hi.total_m2 >= lo.total_m2

    def test_mech_cap_binds(self, demo):
        a = compute(replace(demo, mech=100)).areas
        assert a.mech_area == a.legal_far * 0.10

    def test_caps_never_raise_user_ratio(self, demo):
        a = compute(replace(demo, mech=5, stair=5, balcony=5)).areas
        assert a.mech_area == pytest.approx(a.legal_far * 0.05)
        assert a.stair_area == pytest.approx(a.legal_far * 0.05)
        assert a.balcony_area == pytest.approx(a.legal_far * 0.05)

    def test_stair_cap_is_fifteen_percent(self, demo):
        a = compute(replace(demo, stair=100)).areas
        assert a.stair_area == a.legal_far * 0.15

    def test_roof_cap_scales_with_layers(self, demo):
        a = compute(replace(demo, roof=50, roof_layers=3)).areas
        assert a.roof_area == pytest.approx(a.max_build_area * 0.10 * 3)

    @pytest.mark.parametrize("changes", [
        {},
        {"plan_fee": 123456, "neighbor_fee": 1e6},
        {"build_cost": 0},
        {"area": 1234.5, "far": 360, "basement": 5, "new_units": 40},
    ])
    def test_other_fees_identity(self, demo, changes):
        c = compute(replace(demo, **changes)).costs
        total = c.other_fees + c.rebuild_cost + c.design_fee + c.loan_interest + c.full_mgmt_fee
        assert total == pytest.approx(c.total_cost, rel=1e-12, abs=1e-6)
        assert c.other_fees >= 0

    def test_other_fees_match_breakdown(self, demo_result):
        c = demo_result.costs
        assert c.other_fees == pytest.approx(c.breakdown.total(), rel=1e-12)

    @pytest.mark.parametrize("new_units, expected", [(21, 1), (22, 0), (30, 0), (0, 22)])
    def test_sell_parks_boundaries(self, demo, new_units, expected):
        r = compute(replace(demo, new_units=new_units))
        assert r.sales.total_parks == 22
        assert r.equity.sell_parks == expected

    def test_single_floor_sells_all_on_ground(self, demo):
        s = compute(replace(demo, floors=1)).sales
        assert s.upper_floor_sale == 0
        assert s.first_floor_sale == s.above_ground_ping

    def test_zero_floors_counted_as_one_for_loan(self, demo):
        c = compute(replace(demo, floors=0)).costs
        assert c.loan_years == pytest.approx((6 + 2 * 3 + 1 + 0.5 * 2 + 18) / 12)

    def test_fractional_counts_are_floored(self, demo):
        a = compute(replace(demo, basement=3.9)).areas
        assert a.basement_area == pytest.approx(900)

    def test_idempotent(self, demo):
        assert compute(demo).to_dict() == compute(demo).to_dict()
        assert compute(demo).audit() == compute(demo).audit()

    def test_mapping_with_camel_case_keys(self, demo_result):
        raw = {
            "area": 500, "bcRatio": 45, "far": 225, "excavate": 60, "floors": 12, "basement": 3,
            "roofLayers": 2, "mech": 10, "stair": 10, "balcony": 10, "roof": 10, "common": 34,
            "buildCost": 280000, "legalCost": 18000, "parkPrice": 3000000, "price1F": 1200000,
            "price2F": 950000, "oldPing": 40, "newUnits": 12, "sellPercent": 40, "parkSize": 8,
        }
        assert compute(raw).to_dict() == demo_result.to_dict()


class TestStages:
    """Stages run on their own, in dependency order"""

    def test_areas_take_fractions(self):
        a = compute_areas(area=100, bc_ratio=0.5, far=2.0, excavate=0.5, basement=2, roof_layers=1,
                          mech=0.2, stair=0.2, balcony=0.2, roof=0.2)
        assert a.max_build_area == 50
        assert a.legal_far == 200
        assert a.mech_area == pytest.approx(20)
        assert a.stair_area == pytest.approx(30)
        assert a.roof_area == pytest.approx(5)
        assert a.basement_area == 100

    def test_sales_from_areas(self):
        a = compute_areas(area=100, bc_ratio=0.5, far=2.0, excavate=0.5, basement=2, roof_layers=0,
                          mech=0, stair=0, balcony=0, roof=0)
        s = compute_sales(a, area=100, floors=5, park_size=2)
        assert s.basement_ping == pytest.approx(100 * P)
        assert s.total_parks == 9  # floor(30.25 * 0.65 / 2)


def _areas(legal_far, total_ping):
    return Areas(max_build_area=0, legal_far=legal_far, bonus_far=0, mech_area=0, stair_area=0,
                 balcony_area=0, roof_area=0, excavate_area=0, basement_area=0,
                 total_m2=total_ping / P, total_ping=total_ping)


def _sales(total_parks, first, upper):
    return Sales(basement_ping=0, park_area_ping=0, total_parks=total_parks, above_ground_ping=first + upper,
                 first_floor_sale=first, upper_floor_sale=upper, total_sale_ping=first + upper,
                 land_efficiency=0)


def _costs(total_cost):
    return Costs(legal_total_cost=0, rebuild_cost=0, design_fee=0, loan_years=0, loan_interest=0,
                 full_mgmt_fee=0, total_cost=total_cost, other_fees=0,
                 breakdown=CostBreakdown(*([0.0] * 9)))


class TestCostStage:
    """compute_costs on hand-built areas"""

    @pytest.fixture
    def costs(self):
        return compute_costs(_areas(legal_far=1000, total_ping=100), build_cost=100_000, legal_cost=10_000,
                             floors=12, basement=3, roof_layers=2, new_units=4, fixed_fees=(1000, 2000))

    def test_base_costs(self, costs):
        assert costs.legal_total_cost == approx(10_000_000)
        assert costs.rebuild_cost == approx(10_000_000)
        assert costs.design_fee == approx(900_000)
        assert costs.full_mgmt_fee == approx(1_500_000)

    def test_loan_timeline_and_interest(self, costs):
        # 6 + 2*3 + 12 + 0.5*2 + 18 months
        assert costs.loan_years == approx(43 / 12)
        assert costs.loan_interest == approx(10_000_000 * 0.0326 * 43 / 12)
        assert costs.breakdown.trust_fee == approx(10_000_000 * 0.004 * 43 / 12)

    def test_breakdown_lines(self, costs):
        b = costs.breakdown
        assert b.fund == approx(40_000)
        assert b.license_fee == approx(10_000)
        assert b.review_fee == approx(1_000)
        assert b.bonus_app_fee == approx(20_000)
        assert b.pipe_fee == approx(390_000)
        assert b.cadastral_fee == approx(80_000)
        assert b.rights_fees == approx(3_000)
        assert b.stamp_tax == approx(10_000)

    def test_total_and_residual(self, costs):
        b = costs.breakdown
        assert costs.total_cost == approx(
            costs.rebuild_cost + costs.design_fee + costs.loan_interest + costs.full_mgmt_fee + b.total())
        assert costs.other_fees == approx(b.total())

    def test_no_fixed_fees(self):
        c = compute_costs(_areas(0, 0), build_cost=0, legal_cost=0, floors=1, basement=0, roof_layers=0,
                          new_units=0)
        assert c.breakdown.rights_fees == 0
        assert c.total_cost == 0


class TestRevenueStage:
    """compute_revenue on hand-built sales and costs"""

    def test_revenue_lines(self):
        r = compute_revenue(_sales(10, 50, 200), _costs(92_500_000),
                            park_price=1_500_000, price_1f=1_000_000, price_2f=600_000)
        assert r.park_revenue == approx(15_000_000)
        assert r.first_revenue == approx(50_000_000)
        assert r.upper_revenue == approx(120_000_000)
        assert r.total_revenue == approx(185_000_000)
        assert r.common_burden_pct == approx(50)

    def test_no_revenue_means_no_burden(self):
        r = compute_revenue(_sales(0, 0, 0), _costs(1_000_000), park_price=0, price_1f=0, price_2f=0)
        assert r.total_revenue == 0
        assert r.common_burden_pct == 0


class TestEquityStage:
    """compute_equity on hand-built sales"""

    def test_exchange(self):
        e = compute_equity(_sales(10, 50, 200), park_price=1_500_000, price_2f=600_000,
                           new_units=4, sell_percent=0.25, common=0.2, old_ping=30)
        assert e.sell_parks == 6
        assert e.sell_upper_ping == approx(50)
        assert e.cash_back == approx(6 * 1_500_000 + 50 * 600_000)
        assert e.remain_upper == approx(150)
        assert e.return_indoor == approx(160)
        assert e.ping_exchange == approx(160 / 30)
        assert e.return_ratio == approx(0.64)
        assert e.is_one_for_one

    def test_units_beyond_parking_sell_nothing(self):
        e = compute_equity(_sales(3, 50, 200), park_price=1_500_000, price_2f=600_000,
                           new_units=8, sell_percent=0, common=0, old_ping=300)
        assert e.sell_parks == 0
        assert e.cash_back == 0
        assert e.return_indoor == approx(250)
        assert not e.is_one_for_one

    def test_no_sale_area(self):
        e = compute_equity(_sales(0, 0, 0), park_price=0, price_2f=0, new_units=0,
                           sell_percent=0.5, common=0.3, old_ping=0)
        assert e.return_ratio == 0
        assert e.ping_exchange == 0

from dataclasses import replace

import pytest

from hkplan.cost_tables import InvalidArgument, housing_table, food_table
from hkplan.cost_projector import (
    calculate_housing_cost,
    calculate_food_cost,
    calculate_child_education_cost,
    calculate_insurance_cost,
    calculate_monthly_cost,
    calculate_first_year_cost,
    calculate_seven_year_cost,
    yearly_projection,
    monthly_breakdown_frame,
)
from hkplan.selection import ChildEducation, UserSelection, default_selection


def test_housing_and_food_use_average():
    for area, entry in housing_table().items():
        assert calculate_housing_cost(area) == entry["avg"]
    assert calculate_housing_cost("hongKongIsland") == 32500
    for mode, entry in food_table().items():
        assert calculate_food_cost(mode) == entry["avg"]


def test_unknown_area_and_food_rejected():
    with pytest.raises(InvalidArgument):
        calculate_housing_cost("lantau")
    with pytest.raises(InvalidArgument):
        calculate_food_cost("lavish")


def test_child_education_cost():
    child = ChildEducation(school_type="government", tutoring=True, tutoring_count=2,
                           extracurricular=True, extracurricular_count=1)
    # 0 + 2000 + 2*400*40 + 1*300*40
    assert calculate_child_education_cost(child) == 46000
    assert calculate_child_education_cost(ChildEducation(school_type="international")) == 200000


def test_child_education_monotonic_in_sessions():
    costs = [
        calculate_child_education_cost(ChildEducation(tutoring=True, tutoring_count=n,
                                                      extracurricular=True, extracurricular_count=n))
        for n in range(1, 6)
    ]
    assert costs == sorted(costs)
    assert costs[1] - costs[0] == 400 * 40 + 300 * 40


def test_child_education_ignores_counts_when_disabled():
    a = ChildEducation(tutoring=False, tutoring_count=1, extracurricular=False, extracurricular_count=1)
    b = ChildEducation(tutoring=False, tutoring_count=5, extracurricular=False, extracurricular_count=5)
    assert calculate_child_education_cost(a) == calculate_child_education_cost(b) == 2000


def test_session_count_out_of_range_rejected():
    with pytest.raises(InvalidArgument):
        ChildEducation(tutoring=True, tutoring_count=6)
    with pytest.raises(InvalidArgument):
        ChildEducation(extracurricular=True, extracurricular_count=0)
    # Disabled activity: count is not read
    ChildEducation(tutoring=False, tutoring_count=0)


def test_unknown_school_type_rejected():
    with pytest.raises(InvalidArgument):
        calculate_child_education_cost(ChildEducation(school_type="homeschool"))


def test_insurance_cost():
    assert calculate_insurance_cost(2, 4) == 2 * 4000 + 4 * 3000
    assert calculate_insurance_cost(2, 0) == 8000


def test_monthly_cost_default_scenario():
    m = calculate_monthly_cost(default_selection())
    assert m.housing == 25000
    assert m.food == 15000
    assert m.transport == 2500
    assert m.utilities == 2000
    assert m.miscellaneous == 4000
    assert m.education == pytest.approx(92000 / 12)
    assert m.insurance == pytest.approx(20000 / 12)
    assert m.total == pytest.approx(57833.3333, rel=1e-6)


def test_monthly_total_is_sum_of_components():
    m = calculate_monthly_cost(default_selection())
    assert m.total == (m.housing + m.food + m.transport + m.utilities
                       + m.education + m.insurance + m.miscellaneous)


def test_monthly_cost_without_insurance():
    sel = UserSelection(include_insurance=False, insurance_count=4)
    assert calculate_monthly_cost(sel).insurance == 0


def test_first_year_cost_both_plans():
    base = default_selection()
    monthly = calculate_monthly_cost(base).total
    expected_one_time = {"A": 5000 + 30000, "B": 3000 + 30000 + 120000 + 3000}
    for pid, one_time in expected_one_time.items():
        fy = calculate_first_year_cost(replace(base, plan=pid))
        assert fy.one_time == one_time
        assert fy.monthly == monthly
        assert fy.yearly == monthly * 12
        assert fy.total == one_time + monthly * 12
        assert fy.breakdown.living == fy.yearly


def test_first_year_breakdown_defaults_missing_fields_to_zero():
    fy = calculate_first_year_cost(UserSelection(plan="A"))
    assert fy.breakdown.visa == 5000
    assert fy.breakdown.relocation == 30000
    assert fy.breakdown.tuition == 0
    assert fy.breakdown.exam == 0


def test_one_time_items_leave_out_living():
    for pid in ("A", "B"):
        fy = calculate_first_year_cost(replace(default_selection(), plan=pid))
        items = fy.breakdown.one_time_items()
        assert set(items) == {"visa", "relocation", "tuition", "exam"}
        assert sum(items.values()) == fy.one_time


def test_first_year_rejects_unknown_plan():
    with pytest.raises(InvalidArgument):
        calculate_first_year_cost(UserSelection(plan="mixed"))


def test_seven_year_growth():
    sel = default_selection()
    m = calculate_monthly_cost(sel).total
    f = calculate_first_year_cost(sel).total
    expected = f + sum(m * 12 * 1.03 ** (y - 1) for y in range(2, 8))
    result = calculate_seven_year_cost(sel)
    assert isinstance(result, int)
    assert abs(result - expected) <= 0.5


def test_seven_year_does_not_repeat_one_time_costs():
    a = calculate_seven_year_cost(UserSelection(plan="A"))
    b = calculate_seven_year_cost(UserSelection(plan="B"))
    # Same lifestyle: only the one-time difference separates the plans
    assert b - a == pytest.approx(156000 - 35000, abs=1)


def test_yearly_projection_matches_seven_year_total():
    sel = default_selection()
    df = yearly_projection(sel)
    assert list(df["year"]) == [1, 2, 3, 4, 5, 6, 7]
    assert df.loc[0, "one_time"] == 156000
    assert (df.loc[1:, "one_time"] == 0).all()
    assert df.loc[1, "living"] == pytest.approx(df.loc[0, "living"] * 1.03)
    assert df["total"].sum() == pytest.approx(calculate_seven_year_cost(sel), abs=1)
    assert df["cumulative"].iloc[-1] == pytest.approx(df["total"].sum())


def test_monthly_breakdown_frame_skips_zero_components():
    m = calculate_monthly_cost(UserSelection(include_insurance=False))
    df = monthly_breakdown_frame(m)
    assert "insurance" not in set(df["category"])
    assert df["amount"].sum() == pytest.approx(m.total)
    assert df["share"].sum() == pytest.approx(1.0)

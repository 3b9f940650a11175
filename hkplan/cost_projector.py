from dataclasses import dataclass, asdict
from typing import Dict, List

import pandas as pd

from hkplan.cost_tables import (
    food_entry,
    housing_entry,
    other_costs,
    plan_option,
    projection_policy,
    school_entry,
)
from hkplan.formatting import round_half_up
from hkplan.selection import ChildEducation, UserSelection

COMPONENT_LABELS = {
    "housing": "Housing",
    "food": "Food",
    "transport": "Transport",
    "utilities": "Utilities",
    "education": "Children's education",
    "insurance": "Medical insurance",
    "miscellaneous": "Miscellaneous",
}


@dataclass(frozen=True)
class MonthlyCostBreakdown:
    housing: float
    food: float
    transport: float
    utilities: float
    education: float
    insurance: float
    miscellaneous: float
    total: float

    def components(self) -> Dict[str, float]:
        d = asdict(self)
        d.pop("total")
        return d


@dataclass(frozen=True)
class OneTimeBreakdown:
    visa: float
    relocation: float
    tuition: float
    exam: float
    living: float

    def one_time_items(self) -> Dict[str, float]:
        """Year-1 one-off charges; first-year living is carried separately."""
        d = asdict(self)
        d.pop("living")
        return d


@dataclass(frozen=True)
class FirstYearBreakdown:
    one_time: float
    monthly: float
    yearly: float
    total: float
    breakdown: OneTimeBreakdown


def calculate_housing_cost(area: str) -> float:
    return housing_entry(area)["avg"]


def calculate_food_cost(mode: str) -> float:
    return food_entry(mode)["avg"]


def _sessions_per_year() -> int:
    # 4 weeks a month over 10 teaching months -> 40 sessions per weekly slot
    policy = projection_policy()
    return policy["weeks_per_month"] * policy["teaching_months"]


def calculate_child_education_cost(child: ChildEducation) -> float:
    """Annual cost for one child: school fees plus enabled weekly classes."""
    school = school_entry(child.school_type)
    other = other_costs()
    total = school["tuition"] + school["extras"]

    if child.tutoring:
        total += child.tutoring_count * other["tutoring"]["per_session"] * _sessions_per_year()

    if child.extracurricular:
        total += child.extracurricular_count * other["extracurricular"]["per_session"] * _sessions_per_year()

    return total


def calculate_insurance_cost(adults: int, children: int) -> float:
    premiums = other_costs()["insurance"]
    return adults * premiums["adult"] + children * premiums["child"]


def calculate_monthly_cost(selection: UserSelection) -> MonthlyCostBreakdown:
    other = other_costs()
    housing = calculate_housing_cost(selection.area)
    food = calculate_food_cost(selection.food_mode)
    transport = other["transport"]["avg"]
    utilities = other["utilities"]["avg"]

    child1_yearly = calculate_child_education_cost(selection.child1)
    child2_yearly = calculate_child_education_cost(selection.child2)
    education = (child1_yearly + child2_yearly) / 12

    insurance = 0
    if selection.include_insurance:
        adults = projection_policy()["household_adults"]
        insurance = calculate_insurance_cost(adults, selection.insurance_count) / 12

    miscellaneous = other["miscellaneous"]["avg"]

    total = housing + food + transport + utilities + education + insurance + miscellaneous

    return MonthlyCostBreakdown(
        housing=housing,
        food=food,
        transport=transport,
        utilities=utilities,
        education=education,
        insurance=insurance,
        miscellaneous=miscellaneous,
        total=total,
    )


def _one_time_costs(plan_id: str) -> Dict[str, float]:
    costs = plan_option(plan_id)["one_time_cost"]
    return {
        "visa": costs["visa"],
        "relocation": costs["relocation"],
        "tuition": costs.get("tuition") or 0,
        "exam": costs.get("exam") or 0,
    }


def calculate_first_year_cost(selection: UserSelection) -> FirstYearBreakdown:
    costs = _one_time_costs(selection.plan)
    monthly = calculate_monthly_cost(selection).total

    one_time = costs["visa"] + costs["relocation"] + costs["tuition"] + costs["exam"]
    yearly = monthly * 12
    total = one_time + yearly

    return FirstYearBreakdown(
        one_time=one_time,
        monthly=monthly,
        yearly=yearly,
        total=total,
        breakdown=OneTimeBreakdown(living=yearly, **costs),
    )


def _living_by_year(monthly_total: float) -> List[float]:
    """Living cost for years 1..N; each later year grows on the previous one."""
    policy = projection_policy()
    factor = 1 + policy["growth_rate"]
    base = monthly_total * 12
    out = [base]
    for _year in range(2, policy["years"] + 1):
        base *= factor
        out.append(base)
    return out


def calculate_seven_year_cost(selection: UserSelection) -> int:
    first_year = calculate_first_year_cost(selection)
    living = _living_by_year(first_year.monthly)

    # One-time costs only land in year 1
    total = first_year.total
    for yearly_base in living[1:]:
        total += yearly_base

    return round_half_up(total)


def yearly_projection(selection: UserSelection) -> pd.DataFrame:
    """Year-by-year totals for the projection chart."""
    first_year = calculate_first_year_cost(selection)
    living = _living_by_year(first_year.monthly)
    rows = []
    for i, amount in enumerate(living, start=1):
        one_time = first_year.one_time if i == 1 else 0
        rows.append({
            "year": i,
            "label": f"Year {i}",
            "one_time": one_time,
            "living": amount,
            "total": one_time + amount,
        })
    df = pd.DataFrame(rows)
    df["cumulative"] = df["total"].cumsum()
    return df


def monthly_breakdown_frame(breakdown: MonthlyCostBreakdown) -> pd.DataFrame:
    """Non-zero monthly components with their share of the total (pie chart input)."""
    rows = [
        {"category": k, "label": COMPONENT_LABELS[k], "amount": v}
        for k, v in breakdown.components().items()
        if v > 0
    ]
    df = pd.DataFrame(rows, columns=["category", "label", "amount"])
    df["share"] = df["amount"] / breakdown.total if breakdown.total else 0.0
    return df

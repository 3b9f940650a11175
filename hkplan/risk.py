from typing import Dict

import pandas as pd

from hkplan.cost_tables import InvalidArgument, plan_ids, plan_option

# Higher is better on every dimension (1-10)
RISK_LABELS = {
    "application_success": "Application success",
    "renewal_stability": "Renewal stability",
    "business_impact": "Business continuity",
    "family_impact": "Family impact",
    "financial_pressure": "Financial pressure",
    "flexibility": "Flexibility",
}


def _validate(risks: Dict[str, int]) -> None:
    missing = set(RISK_LABELS) - set(risks)
    if missing:
        raise InvalidArgument(f"Missing risk dimensions: {sorted(missing)}")
    for k, v in risks.items():
        if not 1 <= v <= 10:
            raise InvalidArgument(f"Risk score {k}={v} outside 1-10")


def overall_risk_score(risks: Dict[str, int]) -> float:
    """Mean of the six dimensions, one decimal."""
    _validate(risks)
    values = [risks[k] for k in RISK_LABELS]
    return round(sum(values) / len(values), 1)


def risk_comparison_frame() -> pd.DataFrame:
    rows = []
    for key, label in RISK_LABELS.items():
        row = {"dimension": key, "label": label}
        for pid in plan_ids():
            row[f"plan_{pid}"] = plan_option(pid)["risks"][key]
        rows.append(row)
    return pd.DataFrame(rows)


def overall_scores() -> Dict[str, float]:
    return {pid: overall_risk_score(plan_option(pid)["risks"]) for pid in plan_ids()}


def risk_description(plan_id: str, dimension: str) -> str:
    if dimension not in RISK_LABELS:
        raise InvalidArgument(f"Unknown risk dimension: {dimension!r}")
    return plan_option(plan_id).get("risk_descriptions", {}).get(dimension, "")

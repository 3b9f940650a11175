from datetime import date
from typing import List, Optional

from hkplan.cost_tables import plan_option
from hkplan.recommendation import RecommendationResult


def build_checklist(plan_id: str, today: date, result: Optional[RecommendationResult] = None) -> str:
    plan = plan_option(plan_id)
    lines: List[str] = [
        f"HK Move Checklist — Plan {plan_id}: {plan['name']} ({plan['name_cn']}) — {today.isoformat()}",
        "",
        "1) Visa materials:",
    ]
    lines += [f"   - [ ] {m}" for m in plan.get("materials", [])]

    if result is not None:
        lines += ["", f"2) Recommendation: Plan {result.recommended} ({result.confidence}% confidence)"]
        if result.warnings:
            lines.append("   Watch out:")
            lines += [f"   - {w}" for w in result.warnings]
        lines += ["", "3) Next actions:"]
        lines += [f"   - [ ] {a}" for a in result.action_items]

    return "\n".join(lines)

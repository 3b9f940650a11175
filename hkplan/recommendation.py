"""Weighted rule scoring that picks Plan A (talent admission) or Plan B (study).

Every rule is evaluated on its own, in table order; a rule that fires adds its
delta to one plan's score and appends its messages. The final pick is the
higher score (ties go to A), followed by the chosen plan's four next steps.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional, Tuple

from hkplan.cost_projector import calculate_first_year_cost
from hkplan.cost_tables import plan_option
from hkplan.formatting import round_half_up
from hkplan.selection import DecisionInput, UserSelection

logger = logging.getLogger(__name__)

PROFIT_THRESHOLD = 500000
ZERO_SCORE_CONFIDENCE = 50

# (decision input, first-year totals keyed by plan id) -> fires?
Predicate = Callable[[DecisionInput, Dict[str, float]], bool]


@dataclass(frozen=True)
class Rule:
    name: str
    applies: Predicate
    plan: Optional[str] = None        # whose score gets the delta
    delta: int = 0
    reason: Optional[str] = None
    warning: Optional[str] = None
    actions: Tuple[str, ...] = ()


@dataclass
class RecommendationResult:
    recommended: str
    confidence: int
    reasons: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    action_items: List[str] = field(default_factory=list)
    score_a: int = 0
    score_b: int = 0


def _over_budget(plan_id: str) -> Predicate:
    return lambda inp, first_year: inp.monthly_budget * 12 < first_year[plan_id]


RULES: List[Rule] = [
    Rule("husband_cannot_leave", lambda inp, _: not inp.can_husband_leave, "B", 30,
         reason="The husband cannot leave for long, so Plan B fits better"),
    Rule("husband_can_leave", lambda inp, _: inp.can_husband_leave, "A", 15),
    Rule("reliable_team", lambda inp, _: inp.has_reliable_team, "A", 20,
         reason="A reliable team can run West Shore, which makes Plan A more feasible"),
    Rule("no_reliable_team", lambda inp, _: not inp.has_reliable_team, "B", 25,
         warning="Without a reliable team Plan A carries a higher risk"),
    Rule("english_advanced", lambda inp, _: inp.wife_english_level == "advanced", "B", 25,
         reason="The wife's strong English raises the success rate of the study route"),
    Rule("english_intermediate", lambda inp, _: inp.wife_english_level == "intermediate", "B", 15,
         actions=("Wife should start IELTS preparation, targeting 6.0",)),
    Rule("english_basic", lambda inp, _: inp.wife_english_level == "basic", "B", 5,
         warning="The wife's English needs work; start exam prep 3-4 months ahead",
         actions=("Start IELTS preparation now and consider a training course",)),
    Rule("low_risk_tolerance", lambda inp, _: inp.risk_tolerance == "low", "B", 20,
         reason="Low risk tolerance favours Plan B's more certain success rate"),
    Rule("high_risk_tolerance", lambda inp, _: inp.risk_tolerance == "high", "A", 10),
    Rule("budget_short_for_a", _over_budget("A"), "B", 10,
         warning="The current budget may not cover Plan A's living costs"),
    Rule("budget_short_for_b", _over_budget("B"),
         warning="The current budget may not cover Plan B's living costs"),
    Rule("high_profit", lambda inp, _: inp.annual_profit > PROFIT_THRESHOLD, "A", 15,
         reason="West Shore's high annual profit is worth protecting"),
]


def first_year_totals(selection: UserSelection) -> Dict[str, float]:
    """Year-1 cost of the same lifestyle under each plan, whatever plan is selected."""
    return {
        plan_id: calculate_first_year_cost(replace(selection, plan=plan_id)).total
        for plan_id in ("A", "B")
    }


def score_rules(selection: UserSelection, inp: DecisionInput) -> List[Tuple[str, Optional[str], int]]:
    """(rule name, plan, delta) for every rule that fires, in table order."""
    totals = first_year_totals(selection)
    return [(r.name, r.plan, r.delta) for r in RULES if r.applies(inp, totals)]


def confidence(score_a: int, score_b: int) -> int:
    total = score_a + score_b
    if total == 0:
        return ZERO_SCORE_CONFIDENCE
    return round_half_up(max(score_a, score_b) / total * 100)


def generate_recommendation(selection: UserSelection, inp: DecisionInput) -> RecommendationResult:
    totals = first_year_totals(selection)
    scores = {"A": 0, "B": 0}
    reasons: List[str] = []
    warnings: List[str] = []
    actions: List[str] = []

    for rule in RULES:
        if not rule.applies(inp, totals):
            continue
        if rule.plan:
            scores[rule.plan] += rule.delta
        if rule.reason:
            reasons.append(rule.reason)
        if rule.warning:
            warnings.append(rule.warning)
        actions.extend(rule.actions)

    recommended = "B" if scores["B"] > scores["A"] else "A"
    actions.extend(plan_option(recommended).get("next_steps", []))

    logger.debug("scores A=%s B=%s -> %s", scores["A"], scores["B"], recommended)
    return RecommendationResult(
        recommended=recommended,
        confidence=confidence(scores["A"], scores["B"]),
        reasons=reasons,
        warnings=warnings,
        action_items=actions,
        score_a=scores["A"],
        score_b=scores["B"],
    )

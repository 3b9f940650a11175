from typing import Any, Dict, Iterable

from hkplan.cost_tables import InvalidArgument, ielts_guide, plan_option
from hkplan.selection import ENGLISH_LEVELS


def materials_readiness(plan_id: str, done: Iterable[str]) -> Dict[str, Any]:
    materials = plan_option(plan_id).get("materials", [])
    ticked = set(done)
    checks = {m: m in ticked for m in materials}
    total = len(checks)
    finished = sum(1 for v in checks.values() if v)
    pct = round((finished / total) * 100) if total else 0
    status = ("On track" if pct >= 75 else "Getting there" if pct >= 50 else "Start here")
    return {"percent": pct, "status": status, "checks": checks}


def ielts_prep_plan(english_level: str) -> Dict[str, Any]:
    """Score target, suggested prep time for the given English level, and study resources."""
    if english_level not in ENGLISH_LEVELS:
        raise InvalidArgument(f"Unknown english level: {english_level!r}")
    guide = ielts_guide()
    target = guide.get("target", {})
    return {
        "target": (f"IELTS {target.get('ielts', 6.0)} (no band below {target.get('ielts_min_band', 5.5)})"
                   f" or TOEFL {target.get('toefl', 80)}"),
        "prep_time": guide.get("prep_months", {}).get(english_level, "-"),
        "resources": list(guide.get("resources", [])),
        "links": list(guide.get("links", [])),
    }

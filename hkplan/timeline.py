from dataclasses import dataclass
from typing import List, Optional

import pandas as pd

from hkplan.cost_tables import plan_ids, plan_option

EVENT_TYPES = ("preparation", "application", "approval", "relocation", "education", "milestone")


@dataclass(frozen=True)
class TimelineEvent:
    id: str
    date: str          # display label ("2026 Q1", "Sep 2027"), not a calendar date
    title: str
    description: str
    type: str


def build_timeline(plan_id: str) -> List[TimelineEvent]:
    items = []
    for raw in plan_option(plan_id).get("timeline", []):
        items.append(TimelineEvent(
            id=str(raw["id"]),
            date=str(raw["date"]),
            title=raw["title"],
            description=raw.get("description", ""),
            type=raw.get("type", "milestone"),
        ))
    return items


def permanent_residence_eta(plan_id: str) -> Optional[str]:
    # Last milestone is the 7-year permanent residence application
    milestones = [e for e in build_timeline(plan_id) if e.type == "milestone"]
    return milestones[-1].date if milestones else None


def timeline_frame() -> pd.DataFrame:
    rows = []
    for pid in plan_ids():
        for step, e in enumerate(build_timeline(pid), start=1):
            rows.append({
                "plan": pid,
                "step": step,
                "date": e.date,
                "title": e.title,
                "description": e.description,
                "type": e.type,
            })
    return pd.DataFrame(rows, columns=["plan", "step", "date", "title", "description", "type"])

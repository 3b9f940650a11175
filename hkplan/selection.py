from dataclasses import dataclass, field

from hkplan.cost_tables import InvalidArgument

SESSION_RANGE = (1, 5)
ENGLISH_LEVELS = ("basic", "intermediate", "advanced")
RISK_TOLERANCES = ("low", "medium", "high")


def _check_sessions(label: str, enabled: bool, count: int) -> None:
    lo, hi = SESSION_RANGE
    if enabled and not (lo <= count <= hi):
        raise InvalidArgument(f"{label} sessions per week must be {lo}-{hi}, got {count}")


@dataclass(frozen=True)
class ChildEducation:
    school_type: str = "government"
    tutoring: bool = False
    tutoring_count: int = 1           # sessions per week, only read when tutoring
    extracurricular: bool = False
    extracurricular_count: int = 1    # sessions per week, only read when extracurricular

    def __post_init__(self):
        _check_sessions("Tutoring", self.tutoring, self.tutoring_count)
        _check_sessions("Extracurricular", self.extracurricular, self.extracurricular_count)


@dataclass(frozen=True)
class UserSelection:
    plan: str = "B"                   # "A" | "B" ("mixed" is a UI-only state)
    study_duration: str = "1year"     # "1year" | "2year", descriptive only
    area: str = "kowloon"
    food_mode: str = "normal"
    child1: ChildEducation = field(default_factory=ChildEducation)
    child2: ChildEducation = field(default_factory=ChildEducation)
    include_insurance: bool = True
    insurance_count: int = 4          # covered persons, billed at the child premium

    def __post_init__(self):
        if self.insurance_count < 0:
            raise InvalidArgument(f"insurance_count must be >= 0, got {self.insurance_count}")


@dataclass(frozen=True)
class DecisionInput:
    annual_profit: float
    monthly_budget: float
    can_husband_leave: bool
    has_reliable_team: bool
    wife_english_level: str = "intermediate"
    risk_tolerance: str = "medium"

    def __post_init__(self):
        if self.wife_english_level not in ENGLISH_LEVELS:
            raise InvalidArgument(f"Unknown english level: {self.wife_english_level!r}")
        if self.risk_tolerance not in RISK_TOLERANCES:
            raise InvalidArgument(f"Unknown risk tolerance: {self.risk_tolerance!r}")


def default_selection() -> UserSelection:
    """Starting scenario shown by the app: Kowloon, normal food, two kids in government schools."""
    child = ChildEducation(
        school_type="government",
        tutoring=True,
        tutoring_count=2,
        extracurricular=True,
        extracurricular_count=1,
    )
    return UserSelection(
        plan="B",
        study_duration="1year",
        area="kowloon",
        food_mode="normal",
        child1=child,
        child2=child,
        include_insurance=True,
        insurance_count=4,
    )

from pathlib import Path

import pytest
import yaml

from hkplan.cost_tables import (
    CONFIG_ENV,
    CONFIG_PATH,
    InvalidArgument,
    dse_ready_schools,
    housing_table,
    load_config,
    plan_option,
    projection_policy,
    reload_config,
)
from hkplan.cost_projector import calculate_housing_cost, calculate_monthly_cost, calculate_seven_year_cost
from hkplan.selection import ChildEducation, UserSelection

ZERO_TABLES = {
    "housing": {"free": {"min": 0, "max": 0, "avg": 0}},
    "food": {"free": {"min": 0, "max": 0, "avg": 0}},
    "schools": {"free": {"tuition": 0, "extras": 0, "dse_ready": True}},
    "other": {
        "transport": {"avg": 0},
        "utilities": {"avg": 0},
        "miscellaneous": {"avg": 0},
        "tutoring": {"per_session": 0},
        "extracurricular": {"per_session": 0},
        "insurance": {"adult": 0, "child": 0},
    },
    "plans": {
        "A": {"one_time_cost": {"visa": 0, "relocation": 0}},
        "B": {"one_time_cost": {"visa": 0, "relocation": 0, "tuition": 0, "exam": 0}},
    },
}


@pytest.fixture
def zero_tables(tmp_path, monkeypatch):
    path = tmp_path / "zero.yaml"
    path.write_text(yaml.safe_dump(ZERO_TABLES), encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV, str(path))
    reload_config()
    yield path
    monkeypatch.delenv(CONFIG_ENV)
    reload_config()


def test_default_tables_load():
    cfg = load_config()
    assert set(cfg["housing"]) == {"newTerritories", "kowloon", "hongKongIsland"}
    assert set(cfg["food"]) == {"frugal", "normal", "comfortable"}
    assert set(cfg["plans"]) == {"A", "B"}


def test_projection_policy_constants():
    p = projection_policy()
    assert p["growth_rate"] == 0.03
    assert p["years"] == 7
    assert p["weeks_per_month"] * p["teaching_months"] == 40
    assert p["household_adults"] == 2


def test_plan_descriptors():
    for pid in ("A", "B"):
        p = plan_option(pid)
        assert len(p["next_steps"]) == 4
        assert all(1 <= v <= 10 for v in p["risks"].values())
    with pytest.raises(InvalidArgument):
        plan_option("C")


def test_cached_tables_are_read_only():
    with pytest.raises(TypeError):
        housing_table()["kowloon"]["avg"] = 1
    with pytest.raises(TypeError):
        housing_table()["kowloon"] = {"avg": 1}
    with pytest.raises(AttributeError):
        plan_option("A")["next_steps"].append("Extra step")
    assert calculate_housing_cost("kowloon") == 25000
    assert len(plan_option("A")["next_steps"]) == 4


def test_dse_ready_excludes_international():
    assert "international" not in dse_ready_schools()
    assert "government" in dse_ready_schools()


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_config_missing_table(tmp_path):
    path = tmp_path / "partial.yaml"
    path.write_text(yaml.safe_dump({"housing": {}}), encoding="utf-8")
    with pytest.raises(InvalidArgument):
        load_config(path)


def test_zero_cost_tables_project_to_zero(zero_tables):
    child = ChildEducation(school_type="free", tutoring=True, tutoring_count=3)
    sel = UserSelection(plan="A", area="free", food_mode="free", child1=child, child2=child)
    assert calculate_monthly_cost(sel).total == 0
    assert calculate_seven_year_cost(sel) == 0
    # Projection constants fall back to defaults when the file omits them
    assert projection_policy()["years"] == 7


def test_pyproject_lists_hkplan_package():
    tomllib = pytest.importorskip("tomllib")
    with open(Path(__file__).resolve().parents[1] / "pyproject.toml", "rb") as f:
        meta = tomllib.load(f)
    assert meta["tool"]["setuptools"]["packages"] == ["hkplan"]
    assert CONFIG_PATH.exists()

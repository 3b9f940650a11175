import logging
import os
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Sequence

import yaml

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "hk_costs.yaml"
CONFIG_ENV = "HKPLAN_CONFIG"

REQUIRED_TABLES = ("housing", "food", "schools", "other", "plans")

DEFAULT_PROJECTION = {
    "growth_rate": 0.03,
    "years": 7,
    "weeks_per_month": 4,
    "teaching_months": 10,
    "household_adults": 2,
}


class InvalidArgument(ValueError):
    pass


def _freeze(obj: Any) -> Any:
    """Read-only view of parsed YAML: mappings become proxies, lists become tuples."""
    if isinstance(obj, dict):
        return MappingProxyType({k: _freeze(v) for k, v in obj.items()})
    if isinstance(obj, list):
        return tuple(_freeze(v) for v in obj)
    return obj


def _resolve_path(path: Optional[Path]) -> Path:
    if path is not None:
        return Path(path)
    env = os.getenv(CONFIG_ENV)
    if env:
        return Path(env)
    return CONFIG_PATH


def load_config(path: Optional[Path] = None) -> Mapping[str, Any]:
    """Read the YAML cost/plan tables as a frozen mapping. Missing file -> FileNotFoundError."""
    p = _resolve_path(path)
    if not p.exists():
        raise FileNotFoundError(f"Cost tables not found: {p}")
    cfg = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    missing = [t for t in REQUIRED_TABLES if not isinstance(cfg.get(t), dict)]
    if missing:
        raise InvalidArgument(f"{p} is missing tables: {', '.join(missing)}")
    logger.info("Loaded cost tables from %s", p)
    return _freeze(cfg)


@lru_cache(maxsize=1)
def _default_config() -> Mapping[str, Any]:
    return load_config()


def get_config() -> Mapping[str, Any]:
    return _default_config()


def reload_config() -> Mapping[str, Any]:
    """Drop the cached tables (e.g. after HKPLAN_CONFIG changed)."""
    _default_config.cache_clear()
    return _default_config()


def _lookup(table: str, key: str, what: str) -> Mapping[str, Any]:
    entries = get_config()[table]
    if key not in entries:
        raise InvalidArgument(f"Unknown {what}: {key!r} (expected one of {sorted(entries)})")
    return entries[key]


def housing_entry(area: str) -> Mapping[str, Any]:
    return _lookup("housing", area, "area")


def food_entry(mode: str) -> Mapping[str, Any]:
    return _lookup("food", mode, "food mode")


def school_entry(school_type: str) -> Mapping[str, Any]:
    return _lookup("schools", school_type, "school type")


def plan_option(plan_id: str) -> Mapping[str, Any]:
    return _lookup("plans", plan_id, "plan")


def housing_table() -> Mapping[str, Mapping[str, Any]]:
    return get_config()["housing"]


def food_table() -> Mapping[str, Mapping[str, Any]]:
    return get_config()["food"]


def school_table() -> Mapping[str, Mapping[str, Any]]:
    return get_config()["schools"]


def other_costs() -> Mapping[str, Mapping[str, Any]]:
    return get_config()["other"]


def plan_ids() -> List[str]:
    return list(get_config()["plans"])


def projection_policy() -> Mapping[str, Any]:
    return {**DEFAULT_PROJECTION, **(get_config().get("projection") or {})}


def exchange_rate() -> Mapping[str, Any]:
    return get_config().get("exchange_rate") or {"hkd_to_rmb": 0.92, "last_update": None}


def universities() -> Sequence[Mapping[str, Any]]:
    return get_config().get("universities", ())


def ielts_guide() -> Mapping[str, Any]:
    return get_config().get("ielts_guide") or {}


def dse_ready_schools() -> List[str]:
    """School types suitable for the DSE exam track (display filter only)."""
    return [k for k, v in school_table().items() if v.get("dse_ready")]

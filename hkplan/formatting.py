import math

from hkplan.cost_tables import exchange_rate


def round_half_up(x) -> int:
    """Round .5 away from the floor (Python's round() is banker's rounding)."""
    return int(math.floor(x + 0.5))


def format_currency(amount, currency="HKD"):
    try:
        formatted = f"{round_half_up(amount):,}"
    except (TypeError, ValueError, OverflowError):
        return "-"
    return f"HKD {formatted}" if currency == "HKD" else f"¥{formatted}"


def _rate(rate):
    return rate if rate is not None else exchange_rate()["hkd_to_rmb"]


def hkd_to_rmb(hkd, rate=None) -> int:
    return round_half_up(hkd * _rate(rate))


def rmb_to_hkd(rmb, rate=None) -> float:
    return rmb / _rate(rate)

import math
import uuid

MINUTES_PER_DAY = 24 * 60


def parse_clock(value: str) -> int:
    """
    "HH:MM" -> minutes from midnight.
    Raises ValueError for anything that is not a 24h clock time.
    """
    try:
        hh, mm = value.split(":")
        h, m = int(hh), int(mm)
    except (AttributeError, ValueError):
        raise ValueError(f"clock time must look like 'HH:MM' (got {value!r}).") from None
    if not (0 <= h < 24 and 0 <= m < 60):
        raise ValueError(f"clock time must be between 00:00 and 23:59 (got {value!r}).")
    return h * 60 + m


def format_clock(minute_of_day: int) -> str:
    """Minutes (any offset, wraps past midnight) -> zero-padded "HH:MM"."""
    minute_of_day %= MINUTES_PER_DAY
    return f"{minute_of_day // 60:02d}:{minute_of_day % 60:02d}"


def interval_minutes(interval_h: float) -> int:
    """
    Hours -> whole minutes, rounding halves up (2.5 h = 150 min, 1/120 h = 1 min).
    Intervals are never negative, so half-up and half-away-from-zero agree.
    """
    return int(math.floor(float(interval_h) * 60.0 + 0.5))


def new_dose_id() -> str:
    return uuid.uuid4().hex[:12]

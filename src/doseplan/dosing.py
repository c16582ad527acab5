# src/doseplan/dosing.py
from __future__ import annotations

import logging
import math
from datetime import timedelta
from typing import Sequence

import numpy as np

from . import config
from .helpers import MINUTES_PER_DAY, format_clock, interval_minutes, new_dose_id, parse_clock
from .stages import resolve_stage
from .types import DaySchedule, DosageStage, Dose, TherapySettings

_LOGGER = logging.getLogger(__name__)


def wake_window(wake_time: str, sleep_time: str) -> tuple[int, int]:
    """
    Active window as absolute minute offsets from midnight of the dosing day.
    A sleep time at or before the wake time belongs to the next calendar day,
    so it is pushed 24h forward (22:00 -> 06:00 gives (1320, 1800)).
    """
    wake_min = parse_clock(wake_time)
    sleep_min = parse_clock(sleep_time)
    if sleep_min <= wake_min:
        sleep_min += MINUTES_PER_DAY
    return wake_min, sleep_min


def day_doses(stage: DosageStage, wake_min: int, sleep_min: int) -> tuple[Dose, ...]:
    """
    Doses for one day under `stage`.

    Candidates start at wake time and step by the stage interval, at most
    stage.max_doses of them. The first one is always taken. After that the scan
    stops at the first candidate later than sleep_min; nothing past it is tried.
    """
    _validate_stage(stage)
    if stage.max_doses == 0:
        return ()

    step = interval_minutes(stage.interval_h)
    n = stage.max_doses
    if step > 0:
        # Only candidates up to the first one past sleep_min can matter
        n = min(n, max(1, (sleep_min - wake_min) // step + 2))
    # Absolute offsets, may run past 1440 for a window that crosses midnight
    offsets = wake_min + np.arange(n, dtype=np.int64) * step

    late = np.flatnonzero(offsets[1:] > sleep_min)
    count = 1 + int(late[0]) if late.size else len(offsets)

    doses = []
    for offset in offsets[:count]:
        minute = int(offset) % MINUTES_PER_DAY
        doses.append(Dose(clock_time=format_clock(minute), minute_of_day=minute, dose_id=new_dose_id()))
    return tuple(doses)


def course_days(settings: TherapySettings) -> int:
    """Course length: from the pill supply when one is given (> 0), else total_days."""
    if settings.pills_in_package and settings.pills_in_package > 0:
        return estimate_days_from_pills(settings.pills_in_package, settings.dosage_stages)
    return settings.total_days


def generate_schedule(settings: TherapySettings) -> list[DaySchedule]:
    """
    Day-by-day dose plan for the whole course.

    One DaySchedule per day 1..course_days(settings), in order. A non-positive
    day count gives an empty plan. Missing stage coverage is not reported: the
    last stage of the table keeps applying.
    """
    _validate_stage_table(settings.dosage_stages)
    wake_min, sleep_min = wake_window(settings.wake_time, settings.sleep_time)
    n_days = course_days(settings)

    days: list[DaySchedule] = []
    for d in range(1, n_days + 1):
        stage = resolve_stage(d, settings.dosage_stages)
        days.append(DaySchedule(
            day=d,
            date=settings.start_date + timedelta(days=d - 1),
            doses=day_doses(stage, wake_min, sleep_min),
            stage=stage,
        ))

    _LOGGER.debug("Generated %d day(s) starting %s, window %s-%s",
                  len(days), settings.start_date, settings.wake_time, settings.sleep_time)
    return days


def estimate_days_from_pills(pill_count: int, stages: Sequence[DosageStage],
                             max_days: int | None = None) -> int:
    """
    Number of days a pill supply covers.

    Walks the course from day 1 adding each day's max_doses, and returns the day on
    which the running total first reaches pill_count. pill_count <= 0 needs 0 days.

    max_days (default config.MAX_ESTIMATED_DAYS) is a safety cutoff for tables that
    never consume anything; getting it back means the table is degenerate, not
    that the supply really lasts that long.
    """
    limit = config.MAX_ESTIMATED_DAYS if max_days is None else max_days
    _validate_non_negative_int("max_days", limit)
    if pill_count <= 0:
        return 0
    _validate_stage_table(stages)

    used = 0
    day = 0
    while used < pill_count and day < limit:
        day += 1
        used += resolve_stage(day, stages).max_doses

    if used < pill_count:
        _LOGGER.warning("Pill estimate hit the %d-day cutoff with %d of %d pills used; "
                        "check the stage table for zero-dose stages", limit, used, pill_count)
    return day


# --------------------------
# Small input validators
# --------------------------
def _validate_stage_table(stages: Sequence[DosageStage]) -> None:
    if not stages:
        raise ValueError("dosage_stages must not be empty.")

def _validate_stage(stage: DosageStage) -> None:
    if not (stage.interval_h >= 0 and math.isfinite(stage.interval_h)):
        raise ValueError(f"interval_h must be a finite number >= 0 (got {stage.interval_h}).")
    _validate_non_negative_int("max_doses", stage.max_doses)

def _validate_non_negative_int(name: str, x: int) -> None:
    if not (isinstance(x, int) and x >= 0):
        raise ValueError(f"{name} must be a non-negative integer (got {x}).")

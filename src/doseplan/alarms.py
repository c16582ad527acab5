# src/doseplan/alarms.py
from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from .types import DaySchedule, Dose, TherapySchedule


def day_for_date(days: Sequence[DaySchedule], on_date: date) -> Optional[DaySchedule]:
    """Course entry for a calendar date, or None outside the course."""
    for d in days:
        if d.date == on_date:
            return d
    return None


def due_doses(schedules: Iterable[TherapySchedule], now: datetime) -> list[tuple[TherapySchedule, Dose]]:
    """
    Doses an alarm poller should fire at `now` (minute resolution).

    Only active plans are considered. A dose is due when it sits in the entry for
    now.date() and its minute_of_day equals the current minute. Doses listed under
    a day but falling after midnight (cross-midnight windows) are matched against
    that day's date, the same way they are listed.
    """
    minute = now.hour * 60 + now.minute
    today = now.date()

    due: list[tuple[TherapySchedule, Dose]] = []
    for schedule in schedules:
        if not schedule.is_active:
            continue
        entry = day_for_date(schedule.days, today)
        if entry is None:
            continue
        due.extend((schedule, dose) for dose in entry.doses if dose.minute_of_day == minute)
    return due

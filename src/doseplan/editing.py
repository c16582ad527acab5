# src/doseplan/editing.py
"""
Manual edits applied after generation.

Every function returns a new DaySchedule (or list); generated plans are never
mutated in place. Only add_dose re-sorts; a retimed dose keeps its position
until the next add.
"""
import dataclasses
from typing import Sequence

from .helpers import format_clock, new_dose_id, parse_clock
from .types import DaySchedule, Dose


def add_dose(day: DaySchedule, clock_time: str) -> DaySchedule:
    """Insert a dose at clock_time. Same-minute duplicates are allowed; the sort is stable."""
    minute = parse_clock(clock_time)
    dose = Dose(clock_time=format_clock(minute), minute_of_day=minute, dose_id=new_dose_id())
    doses = sorted([*day.doses, dose], key=lambda d: d.minute_of_day)
    return dataclasses.replace(day, doses=tuple(doses))


def remove_dose(day: DaySchedule, dose_id: str) -> DaySchedule:
    """Drop the dose with dose_id; unknown ids leave the day unchanged."""
    return dataclasses.replace(day, doses=tuple(d for d in day.doses if d.dose_id != dose_id))


def retime_dose(day: DaySchedule, dose_id: str, clock_time: str) -> DaySchedule:
    minute = parse_clock(clock_time)
    doses = tuple(
        dataclasses.replace(d, clock_time=format_clock(minute), minute_of_day=minute)
        if d.dose_id == dose_id else d
        for d in day.doses
    )
    return dataclasses.replace(day, doses=doses)


def replace_day(days: Sequence[DaySchedule], updated: DaySchedule) -> list[DaySchedule]:
    """Copy of the course with the entry for updated.day swapped in."""
    return [updated if d.day == updated.day else d for d in days]

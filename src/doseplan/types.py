# src/doseplan/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

# Clock times travel as "HH:MM" strings; inside the engine everything is MINUTES from midnight.


@dataclass(frozen=True)
class DosageStage:
    """
    One phase of a therapy, covering an inclusive range of course days.

    start_day  : first day this stage governs (1-based)
    end_day    : last day this stage governs, inclusive; None for an open period ("4-"), which
                 never matches a day and is only reached as the table fallback
    interval_h : spacing between consecutive doses while awake, hours (2.5 allowed)
    max_doses  : upper bound on doses issued in one day under this stage
    """
    start_day: int
    end_day: Optional[int]
    interval_h: float
    max_doses: int

    def covers(self, day: int) -> bool:
        if day < self.start_day:
            return False
        return self.end_day is not None and day <= self.end_day

    @property
    def period(self) -> str:
        """Range in table notation, e.g. "1-3" or "21-"."""
        end = "" if self.end_day is None else str(self.end_day)
        return f"{self.start_day}-{end}"


@dataclass(frozen=True)
class Dose:
    """
    A single scheduled intake.

    clock_time    : "HH:MM", zero padded
    minute_of_day : 0..1439, the sortable form of clock_time
    dose_id       : opaque token for referencing the dose from an editor;
                    not part of equality, so regenerated plans compare equal
    """
    clock_time: str
    minute_of_day: int
    dose_id: str = field(default="", compare=False)


@dataclass(frozen=True)
class DaySchedule:
    """
    The plan for one calendar day of the course.

    day   : 1-based index into the course
    date  : start_date + day - 1
    doses : ordered by minute_of_day when generated
    stage : the DosageStage that produced these doses
    """
    day: int
    date: date
    doses: Sequence[Dose]
    stage: DosageStage


@dataclass(frozen=True)
class TherapySettings:
    """
    Everything the generator needs. Passed in explicitly, never read from shared state.

    sleep_time may be <= wake_time, meaning the active window runs past midnight.
    pills_in_package, when > 0, replaces total_days (see dosing.course_days).
    """
    start_date: date
    total_days: int
    wake_time: str
    sleep_time: str
    dosage_stages: Sequence[DosageStage]
    pills_in_package: Optional[int] = None
    medication_name: str = ""


@dataclass(frozen=True)
class TherapySchedule:
    """
    A generated plan plus the settings it came from.

    This is what storage and the alarm layer receive. They treat it as an opaque payload.
    """
    schedule_id: str
    settings: TherapySettings
    days: Sequence[DaySchedule]
    is_active: bool = True

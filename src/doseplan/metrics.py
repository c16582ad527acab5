# src/doseplan/metrics.py
import math
from datetime import date
from typing import Sequence

import numpy as np

from .types import DaySchedule, TherapySchedule


def doses_per_day(days: Sequence[DaySchedule]) -> np.ndarray:
    """Dose count for each course day, in day order."""
    return np.array([len(d.doses) for d in days], dtype=int)


def total_doses(days: Sequence[DaySchedule]) -> int:
    """Pills the plan actually schedules (after any manual edits)."""
    return int(np.sum(doses_per_day(days)))


def course_progress(schedule: TherapySchedule, today: date) -> int:
    """
    Share of the course already reached, in whole percent (0..100).
    A day counts once its date is today or earlier. Halves round up.
    """
    if not schedule.days:
        return 0
    passed = sum(1 for d in schedule.days if d.date <= today)
    pct = int(math.floor(passed / len(schedule.days) * 100 + 0.5))
    return min(100, pct)

# src/doseplan/planner.py
import dataclasses
import logging
import uuid

from .dosing import course_days, generate_schedule
from .types import TherapySchedule, TherapySettings

_LOGGER = logging.getLogger(__name__)


def plan_therapy(settings: TherapySettings) -> TherapySchedule:
    """
    High-level wrapper: settings in, a ready-to-store active plan out.

    When the settings carry a pill supply, the course length is derived from it
    and the returned settings record that effective total_days.
    """
    n_days = course_days(settings)
    effective = dataclasses.replace(settings, total_days=n_days)
    days = generate_schedule(dataclasses.replace(effective, pills_in_package=None))
    _LOGGER.info("Planned %d-day course for %r", n_days, settings.medication_name or "unnamed")
    return TherapySchedule(schedule_id=uuid.uuid4().hex, settings=effective, days=tuple(days))


def toggle_active(schedule: TherapySchedule) -> TherapySchedule:
    """Copy of the plan with alarms switched on/off."""
    return dataclasses.replace(schedule, is_active=not schedule.is_active)

"""
Dose planner configuration.
Defaults come from environment variables; the stock regimen lives here in table notation.
"""

import logging
import os
from datetime import date
from typing import Any, Mapping

from .helpers import parse_clock
from .stages import stages_from_table
from .types import TherapySettings

_LOGGER = logging.getLogger(__name__)

# --- Daily window ---
DEFAULT_WAKE_TIME = os.getenv("DOSEPLAN_WAKE_TIME", "08:00")
DEFAULT_SLEEP_TIME = os.getenv("DOSEPLAN_SLEEP_TIME", "22:00")

# --- Course ---
DEFAULT_TOTAL_DAYS = int(os.getenv("DOSEPLAN_TOTAL_DAYS", "25"))

# Safety cutoff for the pill-budget estimate (tables whose max_doses are all 0)
MAX_ESTIMATED_DAYS = int(os.getenv("DOSEPLAN_MAX_ESTIMATED_DAYS", "1000"))

# --- Stock tapering regimen ---
# period: inclusive day range, interval: hours between doses, maxDoses: daily cap
DEFAULT_STAGE_TABLE = (
    {"period": "1-3", "interval": 2, "maxDoses": 6},
    {"period": "4-12", "interval": 2.5, "maxDoses": 5},
    {"period": "13-16", "interval": 3, "maxDoses": 4},
    {"period": "17-20", "interval": 5, "maxDoses": 3},
    {"period": "21-25", "interval": 12, "maxDoses": 2},
)
DEFAULT_DOSAGE_STAGES = stages_from_table(DEFAULT_STAGE_TABLE)


def _pick(payload: Mapping[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in payload:
        return payload[camel]
    return payload.get(snake, default)


def settings_from_dict(payload: Mapping[str, Any]) -> TherapySettings:
    """
    Build TherapySettings from a plain mapping, e.g. what a settings form submits:

        {"startDate": "2026-03-01", "totalDays": 25, "wakeTime": "08:00",
         "sleepTime": "22:00", "dosageStages": [{"period": "1-3", ...}, ...],
         "pillsInPackage": 90, "medicationName": "..."}

    snake_case keys work too. Missing fields fall back to the module defaults.
    Stage periods are parsed here, once, so lookups never touch strings.
    """
    raw_start = _pick(payload, "startDate", "start_date")
    if raw_start is None:
        start = date.today()
    elif isinstance(raw_start, date):
        start = raw_start
    else:
        # ISO timestamps ("2026-03-01T00:00:00.000Z") keep only the date part
        start = date.fromisoformat(str(raw_start)[:10])

    wake_time = _pick(payload, "wakeTime", "wake_time", DEFAULT_WAKE_TIME)
    sleep_time = _pick(payload, "sleepTime", "sleep_time", DEFAULT_SLEEP_TIME)
    # Fail at load time rather than half way through a generation run
    parse_clock(wake_time)
    parse_clock(sleep_time)

    table = _pick(payload, "dosageStages", "dosage_stages")
    stages = DEFAULT_DOSAGE_STAGES if table is None else stages_from_table(table)

    pills = _pick(payload, "pillsInPackage", "pills_in_package")
    settings = TherapySettings(
        start_date=start,
        total_days=int(_pick(payload, "totalDays", "total_days", DEFAULT_TOTAL_DAYS)),
        wake_time=wake_time,
        sleep_time=sleep_time,
        dosage_stages=stages,
        pills_in_package=None if pills in (None, "") else int(pills),
        medication_name=str(_pick(payload, "medicationName", "medication_name", "")),
    )
    _LOGGER.debug("Loaded settings for %r with %d stage(s)", settings.medication_name, len(stages))
    return settings

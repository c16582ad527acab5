# src/doseplan/stages.py
from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence, Tuple

from .types import DosageStage


def resolve_stage(day: int, stages: Sequence[DosageStage]) -> DosageStage:
    """
    Stage governing `day`: the first one in table order whose range contains it.

    Days outside every range (gaps, or past the last range) fall back to the LAST
    stage in the table, i.e. the final regimen simply continues.
    """
    if not stages:
        raise ValueError("dosage stage table must not be empty.")
    for stage in stages:
        if stage.covers(day):
            return stage
    return stages[-1]


def parse_period(period: str) -> Tuple[int, Optional[int]]:
    """
    Table notation -> (start_day, end_day).
      "1-3"  -> (1, 3)
      "21-"  -> (21, None)   open period, left to the last-stage fallback
      "7"    -> (7, 7)       single day
    """
    text = str(period).strip()
    start_txt, sep, end_txt = text.partition("-")
    try:
        start = int(start_txt)
        if not sep:
            end: Optional[int] = start
        elif end_txt.strip() == "":
            end = None
        else:
            end = int(end_txt)
    except ValueError:
        raise ValueError(f"period must look like '1-3' or '4-' (got {period!r}).") from None

    if start < 1:
        raise ValueError(f"period start must be >= 1 (got {period!r}).")
    if end is not None and end < start:
        raise ValueError(f"period end must be >= start (got {period!r}).")
    return start, end


def stage_from_entry(entry: Mapping) -> DosageStage:
    """
    Build one stage from a config entry such as
    {"period": "4-12", "interval": 2.5, "maxDoses": 5}.
    snake_case keys (interval_h, max_doses) are accepted as well.
    """
    start, end = parse_period(entry["period"])
    interval_h = float(entry["interval_h"] if "interval_h" in entry else entry["interval"])
    max_doses = entry["max_doses"] if "max_doses" in entry else entry["maxDoses"]
    return DosageStage(start_day=start, end_day=end, interval_h=interval_h, max_doses=int(max_doses))


def stages_from_table(entries: Iterable[Mapping]) -> tuple[DosageStage, ...]:
    """Parse a whole stage table once, at load time. Order is preserved (it decides ties)."""
    return tuple(stage_from_entry(e) for e in entries)

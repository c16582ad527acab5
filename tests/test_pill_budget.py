import logging

import pytest

from doseplan import config
from doseplan.types import DosageStage
from doseplan.dosing import estimate_days_from_pills
from doseplan.config import DEFAULT_DOSAGE_STAGES


TWO_THEN_THREE = (DosageStage(1, 3, interval_h=2, max_doses=2),
                  DosageStage(4, None, interval_h=2, max_doses=3))


def test_returns_day_on_which_supply_runs_out():
    """2 + 2 + 2 pills: five pills are used up during day 3."""
    assert estimate_days_from_pills(5, TWO_THEN_THREE) == 3
    assert estimate_days_from_pills(4, TWO_THEN_THREE) == 2
    assert estimate_days_from_pills(7, TWO_THEN_THREE) == 4


def test_default_regimen():
    # days 1-3 take 6 pills each, day 4 onwards 5
    assert estimate_days_from_pills(18, DEFAULT_DOSAGE_STAGES) == 3
    assert estimate_days_from_pills(19, DEFAULT_DOSAGE_STAGES) == 4
    # the whole stock course: 3*6 + 9*5 + 4*4 + 4*3 + 5*2 = 101 pills
    assert estimate_days_from_pills(101, DEFAULT_DOSAGE_STAGES) == 25
    # past day 25 the last stage (2 a day) keeps applying: 101 + 2 + 2
    assert estimate_days_from_pills(105, DEFAULT_DOSAGE_STAGES) == 27
    assert estimate_days_from_pills(102, DEFAULT_DOSAGE_STAGES) == 26


@pytest.mark.parametrize("pills", [0, -3])
def test_no_pills_needs_no_days(pills):
    assert estimate_days_from_pills(pills, DEFAULT_DOSAGE_STAGES) == 0


def test_monotonic_in_pill_count():
    estimates = [estimate_days_from_pills(p, DEFAULT_DOSAGE_STAGES) for p in range(0, 150)]
    assert estimates == sorted(estimates)


def test_zero_dose_table_saturates_at_cutoff(caplog):
    stages = (DosageStage(1, None, interval_h=4, max_doses=0),)
    with caplog.at_level(logging.WARNING, logger="doseplan.dosing"):
        assert estimate_days_from_pills(5, stages) == config.MAX_ESTIMATED_DAYS
    assert "cutoff" in caplog.text

    assert estimate_days_from_pills(5, stages, max_days=10) == 10


def test_cutoff_follows_configuration(monkeypatch):
    monkeypatch.setattr(config, "MAX_ESTIMATED_DAYS", 20)
    stages = (DosageStage(1, None, interval_h=4, max_doses=0),)
    assert estimate_days_from_pills(5, stages) == 20


def test_empty_table_is_rejected():
    with pytest.raises(ValueError):
        estimate_days_from_pills(5, ())

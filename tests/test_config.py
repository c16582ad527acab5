import importlib
from datetime import date

import pytest

from doseplan import config
from doseplan.types import DosageStage
from doseplan.dosing import generate_schedule


def test_default_table_is_parsed_once_into_stages():
    assert len(config.DEFAULT_DOSAGE_STAGES) == 5
    assert config.DEFAULT_DOSAGE_STAGES[0] == DosageStage(1, 3, 2.0, 6)
    assert config.DEFAULT_DOSAGE_STAGES[-1] == DosageStage(21, 25, 12.0, 2)


def test_settings_from_editor_payload():
    """camelCase payload as the settings form submits it, ISO timestamp included."""
    settings = config.settings_from_dict({
        "startDate": "2026-03-01T00:00:00.000Z",
        "medicationName": "CYTISINE",
        "totalDays": 10,
        "pillsInPackage": 20,
        "wakeTime": "07:00",
        "sleepTime": "23:00",
        "dosageStages": [
            {"period": "1-3", "interval": 2, "maxDoses": 6},
            {"period": "4-", "interval": 2.5, "maxDoses": 5},
        ],
    })

    assert settings.start_date == date(2026, 3, 1)
    assert settings.medication_name == "CYTISINE"
    assert settings.total_days == 10
    assert settings.pills_in_package == 20
    assert settings.dosage_stages[1] == DosageStage(4, None, 2.5, 5)

    # 6 + 6 + 6 + 5 >= 20 pills
    assert len(generate_schedule(settings)) == 4


def test_settings_from_dict_fills_defaults():
    settings = config.settings_from_dict({"start_date": date(2026, 1, 5), "pills_in_package": ""})
    assert settings.start_date == date(2026, 1, 5)
    assert settings.wake_time == config.DEFAULT_WAKE_TIME
    assert settings.sleep_time == config.DEFAULT_SLEEP_TIME
    assert settings.total_days == config.DEFAULT_TOTAL_DAYS
    assert settings.dosage_stages == config.DEFAULT_DOSAGE_STAGES
    assert settings.pills_in_package is None


@pytest.mark.parametrize("payload", [
    {"wakeTime": "25:00"},
    {"sleepTime": "noon"},
    {"dosageStages": [{"period": "3-1", "interval": 2, "maxDoses": 1}]},
])
def test_settings_from_dict_rejects_bad_values(payload):
    with pytest.raises(ValueError):
        config.settings_from_dict(payload)


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv("DOSEPLAN_WAKE_TIME", "06:30")
    monkeypatch.setenv("DOSEPLAN_MAX_ESTIMATED_DAYS", "365")
    try:
        importlib.reload(config)
        assert config.DEFAULT_WAKE_TIME == "06:30"
        assert config.MAX_ESTIMATED_DAYS == 365
    finally:
        monkeypatch.undo()
        importlib.reload(config)
    assert config.MAX_ESTIMATED_DAYS == 1000

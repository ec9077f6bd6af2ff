"""Tests for settings loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from clinicalapi.config.settings import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CLINICALAPI_DB_PATH", "ROOM_CHARGE_PER_DAY", "MEDICATION_MARKUP", "BILL_DUE_DAYS"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.database.path == "hospital.db"
    assert settings.billing.room_charge_per_day == 500
    assert settings.billing.medication_markup == 1.2
    assert settings.billing.due_days == 30


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLINICALAPI_DB_PATH", "/tmp/ward.db")
    monkeypatch.setenv("ROOM_CHARGE_PER_DAY", "650")
    monkeypatch.setenv("MEDICATION_MARKUP", "1.35")
    monkeypatch.setenv("BILL_DUE_DAYS", "14")
    settings = Settings(_env_file=None)
    assert settings.database.path == "/tmp/ward.db"
    assert settings.billing.room_charge_per_day == 650
    assert settings.billing.medication_markup == 1.35
    assert settings.billing.due_days == 14


@pytest.mark.parametrize(
    ("name", "value"),
    [("MEDICATION_MARKUP", "0.5"), ("ROOM_CHARGE_PER_DAY", "-10"), ("BILL_DUE_DAYS", "-1")],
)
def test_env_overrides_are_validated(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_assignment_is_validated() -> None:
    settings = Settings(_env_file=None)
    with pytest.raises(ValidationError):
        settings.database.timeout = 0


def test_nested_delimiter(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BILLING__DUE_DAYS", "7")
    monkeypatch.setenv("DATABASE__TIMEOUT", "2.5")
    settings = Settings(_env_file=None)
    assert settings.billing.due_days == 7
    assert settings.database.timeout == 2.5

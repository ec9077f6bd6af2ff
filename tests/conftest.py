"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path

import pytest

from clinicalapi.api import ClinicalAPI
from clinicalapi.config.settings import Settings
from clinicalapi.storage.database import HospitalDatabase


class FakeClock:
    """Controllable clock for services."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 1, 9, 0, 0))


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path of a fresh hospital database."""
    return tmp_path / "hospital.db"


@pytest.fixture
def db(db_path: Path) -> HospitalDatabase:
    """Hospital database seeded with sample reference data."""
    database = HospitalDatabase(db_path)
    database.load_sample_data()
    return database


@pytest.fixture
def settings(db_path: Path) -> Settings:
    settings = Settings()
    settings.database.path = str(db_path)
    return settings


@pytest.fixture
def api(settings: Settings, db: HospitalDatabase, clock: FakeClock) -> ClinicalAPI:
    return ClinicalAPI(settings, db=db, clock=clock)


@pytest.fixture
def admission_id(api: ClinicalAPI) -> int:
    """Patient 1 admitted to Cardiology, room C-101, bed 1."""
    return api.admissions.admit_patient(
        patient_id=1,
        hospital_id=1,
        admission_type="EMERGENCY",
        department_id=1,
        attending_doctor=1,
        room_id=1,
        bed_id=1,
        chief_complaint="Chest pain",
        preliminary_diagnosis="Suspected NSTEMI",
    )

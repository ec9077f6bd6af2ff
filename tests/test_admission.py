"""Tests for admission, discharge and transfer."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import pytest

from clinicalapi.core.errors import BedUnavailableError, InvalidStateError, RecordNotFoundError
from clinicalapi.core.types import AdmissionStatus, BedStatus
from clinicalapi.core.utils import days_between


if TYPE_CHECKING:
    from clinicalapi.api import ClinicalAPI
    from clinicalapi.storage.database import HospitalDatabase
    from tests.conftest import FakeClock


def _count(db: HospitalDatabase, sql: str, params: tuple = ()) -> int:
    return db.query_one(sql, params)[0]


class TestAdmitPatient:
    """Admitting a patient."""

    def test_occupies_bed_and_creates_one_admission(
        self, api: ClinicalAPI, admission_id: int, clock: FakeClock
    ) -> None:
        bed = api.admissions.get_bed(1)
        assert bed.bed_status == BedStatus.OCCUPIED
        assert bed.current_patient_id == 1
        assert bed.occupied_date == clock.current

        assert _count(api.db, "SELECT COUNT(*) FROM patient_admissions") == 1
        others = _count(api.db, "SELECT COUNT(*) FROM beds WHERE bed_status = 'OCCUPIED'")
        assert others == 1

    def test_admission_row(self, api: ClinicalAPI, admission_id: int) -> None:
        admission = api.admissions.get_admission(admission_id)
        assert admission.admission_status == AdmissionStatus.ADMITTED
        assert admission.admission_number == f"ADM-20240301-{admission_id:05d}"
        assert admission.bed_id == 1
        assert admission.department_id == 1

    def test_writes_admission_note(self, api: ClinicalAPI, admission_id: int) -> None:
        rows = api.db.query(
            "SELECT record_type, chief_complaint, diagnosis FROM medical_records "
            "WHERE admission_id = ?",
            (admission_id,),
        )
        assert len(rows) == 1
        assert rows[0]["record_type"] == "ADMISSION_NOTE"
        assert rows[0]["chief_complaint"] == "Chest pain"
        assert rows[0]["diagnosis"] == "Suspected NSTEMI"

    def test_occupied_bed_rejected(self, api: ClinicalAPI, admission_id: int) -> None:
        with pytest.raises(BedUnavailableError):
            api.admissions.admit_patient(
                patient_id=2, hospital_id=1, admission_type="ELECTIVE", department_id=1,
                attending_doctor=2, room_id=1, bed_id=1, chief_complaint="Palpitations",
            )
        assert _count(api.db, "SELECT COUNT(*) FROM patient_admissions") == 1
        assert api.admissions.get_bed(1).current_patient_id == 1

    def test_bed_under_maintenance_rejected(self, api: ClinicalAPI) -> None:
        with pytest.raises(BedUnavailableError):
            api.admissions.admit_patient(
                patient_id=2, hospital_id=1, admission_type="ELECTIVE", department_id=2,
                attending_doctor=2, room_id=3, bed_id=5, chief_complaint="Fever",
            )

    def test_missing_bed(self, api: ClinicalAPI) -> None:
        with pytest.raises(RecordNotFoundError):
            api.admissions.admit_patient(
                patient_id=2, hospital_id=1, admission_type="ELECTIVE", department_id=2,
                attending_doctor=2, room_id=3, bed_id=999, chief_complaint="Fever",
            )

    def test_failure_rolls_back_bed(self, api: ClinicalAPI) -> None:
        # Unknown department fails after the bed has been claimed
        with pytest.raises(sqlite3.IntegrityError):
            api.admissions.admit_patient(
                patient_id=2, hospital_id=1, admission_type="ELECTIVE", department_id=999,
                attending_doctor=2, room_id=1, bed_id=2, chief_complaint="Fever",
            )
        bed = api.admissions.get_bed(2)
        assert bed.bed_status == BedStatus.AVAILABLE
        assert bed.current_patient_id is None
        assert _count(api.db, "SELECT COUNT(*) FROM patient_admissions") == 0
        assert _count(api.db, "SELECT COUNT(*) FROM medical_records") == 0


class TestDischargePatient:
    """Discharging a patient."""

    def test_frees_bed_and_marks_discharged(
        self, api: ClinicalAPI, admission_id: int, clock: FakeClock
    ) -> None:
        discharged_at = clock.current + timedelta(days=3)
        api.admissions.discharge_patient(
            admission_id, discharged_at, "HOME", "NSTEMI",
            discharge_summary="Stable on discharge",
            followup_instructions="Cardiology clinic in 2 weeks",
            discharge_medications="Aspirin 75mg",
            diet_instructions="Low salt",
        )
        admission = api.admissions.get_admission(admission_id)
        assert admission.admission_status == AdmissionStatus.DISCHARGED
        assert admission.discharge_date == discharged_at
        assert admission.discharge_disposition == "HOME"

        bed = api.admissions.get_bed(1)
        assert bed.bed_status == BedStatus.AVAILABLE
        assert bed.current_patient_id is None
        assert bed.occupied_date is None

    def test_writes_summary_and_plan(
        self, api: ClinicalAPI, admission_id: int, clock: FakeClock
    ) -> None:
        api.admissions.discharge_patient(
            admission_id, clock.current, "HOME", "NSTEMI",
            discharge_summary="Stable", followup_instructions="Clinic",
        )
        record = api.db.query_one(
            "SELECT * FROM medical_records WHERE admission_id = ? AND record_type = ?",
            (admission_id, "DISCHARGE_SUMMARY"),
        )
        assert record["diagnosis"] == "NSTEMI"
        assert record["treatment_plan"] == "Clinic"
        assert record["notes"] == "Stable"

        plan = api.db.query_one(
            "SELECT * FROM discharge_planning WHERE admission_id = ?", (admission_id,)
        )
        assert plan["plan_status"] == "COMPLETED"
        assert plan["discharge_destination"] == "HOME"
        assert plan["follow_up_appointments"] == "Clinic"

    def test_existing_plan_is_updated(
        self, api: ClinicalAPI, admission_id: int, clock: FakeClock
    ) -> None:
        with api.db.transaction() as conn:
            conn.execute(
                "INSERT INTO discharge_planning (admission_id, patient_id, hospital_id, "
                "discharge_destination, plan_status) VALUES (?, 1, 1, 'REHAB', 'IN_PROGRESS')",
                (admission_id,),
            )
        api.admissions.discharge_patient(
            admission_id, clock.current, "HOME", "NSTEMI", diet_instructions="Low salt"
        )
        plans = api.db.query(
            "SELECT * FROM discharge_planning WHERE admission_id = ?", (admission_id,)
        )
        assert len(plans) == 1
        assert plans[0]["plan_status"] == "COMPLETED"
        assert plans[0]["diet_instructions"] == "Low salt"
        assert plans[0]["discharge_destination"] == "REHAB"

    def test_missing_admission(self, api: ClinicalAPI, clock: FakeClock) -> None:
        with pytest.raises(RecordNotFoundError):
            api.admissions.discharge_patient(42, clock.current, "HOME", "None")

    def test_aware_discharge_date_stored_naive(
        self, api: ClinicalAPI, admission_id: int, clock: FakeClock
    ) -> None:
        aware = datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc)
        local = aware.astimezone().replace(tzinfo=None)
        api.admissions.discharge_patient(admission_id, aware, "HOME", "NSTEMI")

        admission = api.admissions.get_admission(admission_id)
        assert admission.discharge_date == local
        assert admission.discharge_date.tzinfo is None

        expected = days_between(clock.current, local)
        assert api.admissions.get_length_of_stay(admission_id) == expected
        (summary,) = api.admissions.get_current_admissions(1, status="DISCHARGED")
        assert summary.length_of_stay_days == expected

    def test_discharge_before_admission_rejected(
        self, api: ClinicalAPI, admission_id: int, clock: FakeClock
    ) -> None:
        with pytest.raises(ValueError):
            api.admissions.discharge_patient(
                admission_id, clock.current - timedelta(days=10), "HOME", "NSTEMI"
            )
        admission = api.admissions.get_admission(admission_id)
        assert admission.admission_status == AdmissionStatus.ADMITTED
        assert admission.discharge_date is None
        assert api.admissions.get_bed(1).bed_status == BedStatus.OCCUPIED

    def test_cannot_discharge_twice(
        self, api: ClinicalAPI, admission_id: int, clock: FakeClock
    ) -> None:
        api.admissions.discharge_patient(admission_id, clock.current, "HOME", "NSTEMI")
        with pytest.raises(InvalidStateError):
            api.admissions.discharge_patient(admission_id, clock.current, "HOME", "NSTEMI")


class TestTransferPatient:
    """Transferring a patient."""

    def test_bed_change_moves_occupancy(self, api: ClinicalAPI, admission_id: int) -> None:
        record_id = api.admissions.transfer_patient(
            admission_id, "Needs monitoring", new_room_id=2, new_bed_id=3,
            transfer_notes="Telemetry",
        )
        assert api.admissions.get_bed(1).bed_status == BedStatus.AVAILABLE
        new_bed = api.admissions.get_bed(3)
        assert new_bed.bed_status == BedStatus.OCCUPIED
        assert new_bed.current_patient_id == 1

        admission = api.admissions.get_admission(admission_id)
        assert admission.bed_id == 3
        assert admission.room_id == 2
        assert admission.department_id == 1

        record = api.db.query_one(
            "SELECT record_type, notes FROM medical_records WHERE record_id = ?", (record_id,)
        )
        assert record["record_type"] == "TRANSFER"
        assert record["notes"] == "Transfer Reason: Needs monitoring\nTransfer Notes: Telemetry"

    def test_department_only(self, api: ClinicalAPI, admission_id: int) -> None:
        record_id = api.admissions.transfer_patient(admission_id, "Stepped down", new_department_id=2)
        admission = api.admissions.get_admission(admission_id)
        assert admission.department_id == 2
        assert admission.bed_id == 1
        assert api.admissions.get_bed(1).bed_status == BedStatus.OCCUPIED
        notes = api.db.query_one(
            "SELECT notes FROM medical_records WHERE record_id = ?", (record_id,)
        )["notes"]
        assert notes.endswith("Transfer Notes: N/A")

    def test_occupied_target_rolls_back(self, api: ClinicalAPI, admission_id: int) -> None:
        api.admissions.admit_patient(
            patient_id=2, hospital_id=1, admission_type="ELECTIVE", department_id=1,
            attending_doctor=2, room_id=1, bed_id=2, chief_complaint="Syncope",
        )
        with pytest.raises(BedUnavailableError):
            api.admissions.transfer_patient(admission_id, "Swap", new_bed_id=2)
        assert api.admissions.get_bed(1).current_patient_id == 1
        assert api.admissions.get_bed(2).current_patient_id == 2
        assert api.admissions.get_admission(admission_id).bed_id == 1

    def test_discharged_stay_cannot_transfer(
        self, api: ClinicalAPI, admission_id: int, clock: FakeClock
    ) -> None:
        api.admissions.discharge_patient(admission_id, clock.current, "HOME", "NSTEMI")
        with pytest.raises(InvalidStateError):
            api.admissions.transfer_patient(
                admission_id, "Late move", new_department_id=2, new_room_id=2, new_bed_id=3
            )
        admission = api.admissions.get_admission(admission_id)
        assert admission.department_id == 1
        assert admission.room_id == 1
        assert admission.bed_id == 1
        assert api.admissions.get_bed(1).bed_status == BedStatus.AVAILABLE
        assert api.admissions.get_bed(3).bed_status == BedStatus.AVAILABLE
        transfers = _count(
            api.db, "SELECT COUNT(*) FROM medical_records WHERE record_type = 'TRANSFER'"
        )
        assert transfers == 0


class TestAdmissionQueries:
    """Read-only admission queries."""

    def test_available_beds(self, api: ClinicalAPI, admission_id: int) -> None:
        beds = api.admissions.get_available_beds(1)
        bed_ids = [b.bed_id for b in beds]
        assert 1 not in bed_ids
        assert 5 not in bed_ids
        assert [b.department_name for b in beds] == sorted(b.department_name for b in beds)

    def test_available_beds_filtered(self, api: ClinicalAPI) -> None:
        icu = api.admissions.get_available_beds(1, department_id=1, bed_type="ICU")
        assert [b.bed_number for b in icu] == ["C-102-A"]

    def test_current_admissions(
        self, api: ClinicalAPI, admission_id: int, clock: FakeClock
    ) -> None:
        clock.advance(days=2, hours=13)
        admissions = api.admissions.get_current_admissions(1)
        assert len(admissions) == 1
        summary = admissions[0]
        assert summary.patient_name == "Lena Fischer"
        assert summary.attending_doctor == "Amara Okafor"
        assert summary.room_number == "C-101"
        assert summary.length_of_stay_days == 3

        assert api.admissions.get_current_admissions(1, status="DISCHARGED") == []

    def test_length_of_stay(
        self, api: ClinicalAPI, admission_id: int, clock: FakeClock
    ) -> None:
        clock.advance(days=4, hours=6)
        assert api.admissions.get_length_of_stay(admission_id) == 4
        api.admissions.discharge_patient(
            admission_id, datetime(2024, 3, 3, 21, 0), "HOME", "NSTEMI"
        )
        clock.advance(days=10)
        assert api.admissions.get_length_of_stay(admission_id) == 3

    def test_length_of_stay_missing(self, api: ClinicalAPI) -> None:
        assert api.admissions.get_length_of_stay(999) is None

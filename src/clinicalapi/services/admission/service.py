"""Admission, discharge and transfer workflows."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from clinicalapi.core.errors import BedUnavailableError, InvalidStateError, RecordNotFoundError
from clinicalapi.core.service import Service
from clinicalapi.core.types import AdmissionStatus, BedStatus, PlanStatus, RecordType
from clinicalapi.core.utils import (
    days_between,
    format_document_number,
    parse_timestamp,
    to_local_naive,
)
from clinicalapi.storage.converters import (
    row_to_admission,
    row_to_admission_summary,
    row_to_available_bed,
    row_to_bed,
)


if TYPE_CHECKING:
    import sqlite3
    from datetime import datetime

    from clinicalapi.core.models import Admission, AdmissionSummary, AvailableBed, Bed

logger = logging.getLogger(__name__)

ADMISSION_NUMBER_WIDTH = 5


class AdmissionService(Service):
    """Admits, discharges and transfers inpatients and keeps beds in step."""

    def admit_patient(
        self,
        patient_id: int,
        hospital_id: int,
        admission_type: str,
        department_id: int,
        attending_doctor: int,
        room_id: int,
        bed_id: int,
        chief_complaint: str,
        admission_source: str | None = None,
        preliminary_diagnosis: str | None = None,
    ) -> int:
        """Admit a patient into a bed.

        Writes the admission, occupies the bed and records an admission note
        in a single transaction.

        Returns:
            The new admission id.

        Raises:
            RecordNotFoundError: If the bed does not exist.
            BedUnavailableError: If the bed is not AVAILABLE.
        """
        now = self.now()
        with self.db.transaction() as conn:
            self._claim_bed(conn, bed_id, patient_id, now)

            cursor = conn.execute(
                """INSERT INTO patient_admissions
                (patient_id, hospital_id, admission_date, admission_type, department_id,
                 attending_doctor, room_id, bed_id, admission_source, admission_status)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (patient_id, hospital_id, now.isoformat(), admission_type, department_id,
                 attending_doctor, room_id, bed_id, admission_source,
                 AdmissionStatus.ADMITTED.value),
            )
            admission_id = cursor.lastrowid
            admission_number = format_document_number(
                "ADM", now, admission_id, ADMISSION_NUMBER_WIDTH
            )
            conn.execute(
                "UPDATE patient_admissions SET admission_number = ? WHERE admission_id = ?",
                (admission_number, admission_id),
            )

            conn.execute(
                """INSERT INTO medical_records
                (patient_id, hospital_id, admission_id, doctor_id, record_date,
                 record_type, chief_complaint, diagnosis)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (patient_id, hospital_id, admission_id, attending_doctor, now.isoformat(),
                 RecordType.ADMISSION_NOTE.value, chief_complaint, preliminary_diagnosis),
            )

        logger.info("Admitted patient %s as %s into bed %s", patient_id, admission_number, bed_id)
        return admission_id

    def discharge_patient(
        self,
        admission_id: int,
        discharge_date: datetime,
        discharge_disposition: str,
        final_diagnosis: str,
        discharge_summary: str | None = None,
        followup_instructions: str | None = None,
        discharge_medications: str | None = None,
        diet_instructions: str | None = None,
    ) -> None:
        """Close an admission, complete its discharge plan and free the bed.

        Aware ``discharge_date`` values are stored as naive local time.

        Raises:
            RecordNotFoundError: If the admission does not exist.
            InvalidStateError: If the admission is not ADMITTED.
            ValueError: If ``discharge_date`` precedes the admission date.
        """
        discharge_date = to_local_naive(discharge_date)
        with self.db.transaction() as conn:
            admission = self._require(
                conn,
                """SELECT bed_id, patient_id, hospital_id, attending_doctor, admission_status,
                          admission_date
                FROM patient_admissions WHERE admission_id = ?""",
                (admission_id,), "Admission", admission_id,
            )
            self._ensure_admitted(admission, admission_id)
            admitted = parse_timestamp(admission["admission_date"])
            if discharge_date < admitted:
                msg = f"Discharge date {discharge_date} precedes admission date {admitted}"
                raise ValueError(msg)

            conn.execute(
                """UPDATE patient_admissions
                SET discharge_date = ?, discharge_disposition = ?, discharge_summary = ?,
                    admission_status = ?
                WHERE admission_id = ?""",
                (discharge_date.isoformat(), discharge_disposition, discharge_summary,
                 AdmissionStatus.DISCHARGED.value, admission_id),
            )

            conn.execute(
                """INSERT INTO medical_records
                (patient_id, hospital_id, admission_id, doctor_id, record_date,
                 record_type, diagnosis, treatment_plan, notes)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (admission["patient_id"], admission["hospital_id"], admission_id,
                 admission["attending_doctor"], discharge_date.isoformat(),
                 RecordType.DISCHARGE_SUMMARY.value, final_diagnosis,
                 followup_instructions, discharge_summary),
            )

            # Destination is only set when the plan is first created
            conn.execute(
                """INSERT INTO discharge_planning
                (admission_id, patient_id, hospital_id, discharge_instructions,
                 medication_education, diet_instructions, follow_up_appointments,
                 discharge_destination, plan_status)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(admission_id) DO UPDATE SET
                    discharge_instructions = excluded.discharge_instructions,
                    medication_education = excluded.medication_education,
                    diet_instructions = excluded.diet_instructions,
                    follow_up_appointments = excluded.follow_up_appointments,
                    plan_status = excluded.plan_status""",
                (admission_id, admission["patient_id"], admission["hospital_id"],
                 discharge_summary, discharge_medications, diet_instructions,
                 followup_instructions, discharge_disposition, PlanStatus.COMPLETED.value),
            )

            if admission["bed_id"] is not None:
                self._release_bed(conn, admission["bed_id"])

        logger.info("Discharged admission %s (%s)", admission_id, discharge_disposition)

    def transfer_patient(
        self,
        admission_id: int,
        transfer_reason: str,
        new_department_id: int | None = None,
        new_room_id: int | None = None,
        new_bed_id: int | None = None,
        transfer_notes: str | None = None,
    ) -> int:
        """Move an admitted patient to a new department, room or bed.

        Omitted targets keep their current value. When the bed changes the old
        bed is freed and the new one occupied.

        Returns:
            Id of the ``TRANSFER`` medical record logging the move.
        """
        now = self.now()
        with self.db.transaction() as conn:
            admission = self._require(
                conn,
                """SELECT bed_id, department_id, patient_id, hospital_id, admission_status
                FROM patient_admissions WHERE admission_id = ?""",
                (admission_id,), "Admission", admission_id,
            )
            self._ensure_admitted(admission, admission_id)
            old_bed_id = admission["bed_id"]

            if new_bed_id is not None and new_bed_id != old_bed_id:
                if old_bed_id is not None:
                    self._release_bed(conn, old_bed_id)
                self._claim_bed(conn, new_bed_id, admission["patient_id"], now)

            conn.execute(
                """UPDATE patient_admissions
                SET department_id = COALESCE(?, department_id),
                    room_id = COALESCE(?, room_id),
                    bed_id = COALESCE(?, bed_id)
                WHERE admission_id = ?""",
                (new_department_id, new_room_id, new_bed_id, admission_id),
            )

            notes = (
                f"Transfer Reason: {transfer_reason}\n"
                f"Transfer Notes: {transfer_notes or 'N/A'}"
            )
            cursor = conn.execute(
                """INSERT INTO medical_records
                (patient_id, hospital_id, admission_id, record_date, record_type, notes)
                VALUES (?, ?, ?, ?, ?, ?)""",
                (admission["patient_id"], admission["hospital_id"], admission_id,
                 now.isoformat(), RecordType.TRANSFER.value, notes),
            )
            record_id = cursor.lastrowid

        logger.info("Transferred admission %s: %s", admission_id, transfer_reason)
        return record_id

    def get_available_beds(
        self, hospital_id: int, department_id: int | None = None, bed_type: str | None = None
    ) -> list[AvailableBed]:
        rows = self.db.query(
            """SELECT b.bed_id, b.bed_number, r.room_number, b.bed_type,
                      d.department_name, b.bed_status
            FROM beds b
            JOIN rooms r ON b.room_id = r.room_id
            JOIN departments d ON r.department_id = d.department_id
            WHERE b.hospital_id = ?
              AND b.bed_status = 'AVAILABLE'
              AND (? IS NULL OR d.department_id = ?)
              AND (? IS NULL OR b.bed_type = ?)
            ORDER BY d.department_name, r.room_number, b.bed_number""",
            (hospital_id, department_id, department_id, bed_type, bed_type),
        )
        return [row_to_available_bed(r) for r in rows]

    def get_current_admissions(
        self,
        hospital_id: int,
        department_id: int | None = None,
        status: AdmissionStatus | str = AdmissionStatus.ADMITTED,
    ) -> list[AdmissionSummary]:
        status = AdmissionStatus(status)
        rows = self.db.query(
            """SELECT pa.admission_id, pa.admission_number, pa.admission_date, pa.discharge_date,
                      p.patient_number,
                      p.first_name || ' ' || p.last_name AS patient_name,
                      d.department_name, r.room_number, b.bed_number,
                      sm.first_name || ' ' || sm.last_name AS attending_doctor,
                      pa.admission_status
            FROM patient_admissions pa
            JOIN patients p ON pa.patient_id = p.patient_id
            JOIN departments d ON pa.department_id = d.department_id
            LEFT JOIN beds b ON pa.bed_id = b.bed_id
            LEFT JOIN rooms r ON b.room_id = r.room_id
            LEFT JOIN staff_members sm ON pa.attending_doctor = sm.staff_id
            WHERE pa.hospital_id = ?
              AND (? IS NULL OR pa.department_id = ?)
              AND pa.admission_status = ?
            ORDER BY pa.admission_date DESC""",
            (hospital_id, department_id, department_id, status.value),
        )
        now = self.now()
        return [row_to_admission_summary(r, now) for r in rows]

    def get_length_of_stay(self, admission_id: int) -> int | None:
        """Days from admission to discharge, or to now while still admitted."""
        row = self.db.query_one(
            "SELECT admission_date, discharge_date FROM patient_admissions WHERE admission_id = ?",
            (admission_id,),
        )
        if row is None:
            return None
        ended = parse_timestamp(row["discharge_date"]) or self.now()
        return days_between(parse_timestamp(row["admission_date"]), ended)

    def get_admission(self, admission_id: int) -> Admission:
        row = self.db.query_one(
            "SELECT * FROM patient_admissions WHERE admission_id = ?", (admission_id,)
        )
        if row is None:
            raise RecordNotFoundError("Admission", admission_id)
        return row_to_admission(row)

    def get_bed(self, bed_id: int) -> Bed:
        row = self.db.query_one("SELECT * FROM beds WHERE bed_id = ?", (bed_id,))
        if row is None:
            raise RecordNotFoundError("Bed", bed_id)
        return row_to_bed(row)

    def _claim_bed(
        self, conn: sqlite3.Connection, bed_id: int, patient_id: int, now: datetime
    ) -> None:
        bed = self._require(
            conn, "SELECT bed_status FROM beds WHERE bed_id = ?", (bed_id,), "Bed", bed_id
        )
        if bed["bed_status"] != BedStatus.AVAILABLE.value:
            logger.warning("Bed %s requested but is %s", bed_id, bed["bed_status"])
            raise BedUnavailableError(bed_id, bed["bed_status"])
        conn.execute(
            """UPDATE beds SET bed_status = ?, current_patient_id = ?, occupied_date = ?
            WHERE bed_id = ?""",
            (BedStatus.OCCUPIED.value, patient_id, now.isoformat(), bed_id),
        )

    @staticmethod
    def _release_bed(conn: sqlite3.Connection, bed_id: int) -> None:
        conn.execute(
            """UPDATE beds SET bed_status = ?, current_patient_id = NULL, occupied_date = NULL
            WHERE bed_id = ?""",
            (BedStatus.AVAILABLE.value, bed_id),
        )

    @staticmethod
    def _ensure_admitted(admission: sqlite3.Row, admission_id: int) -> None:
        if admission["admission_status"] != AdmissionStatus.ADMITTED.value:
            raise InvalidStateError(
                f"Admission {admission_id} is {admission['admission_status']}, not ADMITTED"
            )

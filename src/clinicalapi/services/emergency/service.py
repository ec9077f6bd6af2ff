"""Emergency department triage."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from clinicalapi.core.errors import RecordNotFoundError
from clinicalapi.core.service import Service
from clinicalapi.core.types import TriageLevel, TriageStatus
from clinicalapi.storage.converters import row_to_board_entry, row_to_triage


if TYPE_CHECKING:
    from clinicalapi.core.models import EmergencyBoardEntry, TriageRecord

logger = logging.getLogger(__name__)


class EmergencyService(Service):
    """Registers emergency arrivals and tracks them through the department."""

    def register_emergency_patient(
        self,
        patient_id: int,
        hospital_id: int,
        arrival_method: str,
        chief_complaint: str,
        triage_level: TriageLevel | str,
        triage_nurse: int,
        pain_score: int | None = None,
    ) -> int:
        """Register an arrival in WAITING status.

        Returns:
            The new triage id.
        """
        level = TriageLevel(triage_level)
        now = self.now().isoformat()
        with self.db.transaction() as conn:
            cursor = conn.execute(
                """INSERT INTO emergency_triage
                (patient_id, hospital_id, arrival_date, arrival_method, chief_complaint,
                 triage_level, triage_nurse, pain_score, triage_start_time, status)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (patient_id, hospital_id, now, arrival_method, chief_complaint, level.value,
                 triage_nurse, pain_score, now, TriageStatus.WAITING.value),
            )
            triage_id = cursor.lastrowid
        logger.info("Registered triage %s for patient %s (%s)", triage_id, patient_id, level.value)
        return triage_id

    def assign_to_doctor(self, triage_id: int, doctor_id: int) -> None:
        with self.db.transaction() as conn:
            cursor = conn.execute(
                "UPDATE emergency_triage SET assigned_to_doctor = ?, status = ? WHERE triage_id = ?",
                (doctor_id, TriageStatus.IN_PROGRESS.value, triage_id),
            )
            if cursor.rowcount == 0:
                raise RecordNotFoundError("Triage record", triage_id)
        logger.info("Triage %s assigned to doctor %s", triage_id, doctor_id)

    def update_triage_status(
        self,
        triage_id: int,
        new_status: TriageStatus | str,
        disposition: str | None = None,
    ) -> None:
        """Move a triage record to ``new_status``.

        COMPLETED, DISCHARGED and ADMITTED stamp the triage end time. A
        ``disposition`` of ``None`` keeps the current one.
        """
        status = TriageStatus(new_status)
        end_time = self.now().isoformat() if status.is_terminal else None
        with self.db.transaction() as conn:
            cursor = conn.execute(
                """UPDATE emergency_triage
                SET status = ?,
                    disposition = COALESCE(?, disposition),
                    triage_end_time = COALESCE(?, triage_end_time)
                WHERE triage_id = ?""",
                (status.value, disposition, end_time, triage_id),
            )
            if cursor.rowcount == 0:
                raise RecordNotFoundError("Triage record", triage_id)
        logger.info("Triage %s now %s", triage_id, status.value)

    def get_emergency_board(self, hospital_id: int) -> list[EmergencyBoardEntry]:
        """Active arrivals, most urgent first, then by arrival time."""
        rows = self.db.query(
            """SELECT * FROM v_emergency_triage_board
            WHERE hospital_id = ?
            ORDER BY priority, arrival_date, triage_id""",
            (hospital_id,),
        )
        now = self.now()
        return [row_to_board_entry(r, now) for r in rows]

    def get_triage(self, triage_id: int) -> TriageRecord:
        row = self.db.query_one("SELECT * FROM emergency_triage WHERE triage_id = ?", (triage_id,))
        if row is None:
            raise RecordNotFoundError("Triage record", triage_id)
        return row_to_triage(row)

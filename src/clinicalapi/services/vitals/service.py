"""Vital-signs recording and abnormal-range checks."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from clinicalapi.core.service import Service
from clinicalapi.storage.converters import row_to_trend_point, row_to_vital_signs


if TYPE_CHECKING:
    from clinicalapi.core.models import VitalSigns, VitalsTrendPoint

logger = logging.getLogger(__name__)

NORMAL = "Normal"
NOT_AVAILABLE = "N/A"


def calculate_bmi(weight: float | None, height: float | None) -> float | None:
    """Body-mass index from weight in kg and height in cm."""
    if weight is None or height is None or height <= 0:
        return None
    metres = height / 100
    return weight / (metres * metres)


def _outside(value: float | None, low: float | None = None, high: float | None = None) -> bool:
    # Missing readings never count as abnormal
    if value is None:
        return False
    return (low is not None and value < low) or (high is not None and value > high)


def assess_vitals(
    bp_systolic: float | None = None,
    bp_diastolic: float | None = None,
    heart_rate: float | None = None,
    respiratory_rate: float | None = None,
    temperature: float | None = None,
    oxygen_saturation: float | None = None,
) -> str:
    """Compare six vitals against adult reference ranges.

    Returns:
        ``"; "``-joined abnormality labels, or ``"Normal"``.
    """
    findings: list[str] = []
    if _outside(bp_systolic, 90, 180) or _outside(bp_diastolic, 60, 120):
        findings.append("Abnormal BP")
    if _outside(heart_rate, 60, 100):
        findings.append("Abnormal HR")
    if _outside(respiratory_rate, 12, 20):
        findings.append("Abnormal RR")
    if _outside(temperature, 36.1, 37.8):
        findings.append("Abnormal Temp")
    if _outside(oxygen_saturation, low=95):
        findings.append("Low SpO2")
    return "; ".join(findings) if findings else NORMAL


class VitalSignsService(Service):
    """Records vital signs and reports on them."""

    def record_vital_signs(
        self,
        patient_id: int,
        hospital_id: int,
        recorded_by: int,
        admission_id: int | None = None,
        bp_systolic: float | None = None,
        bp_diastolic: float | None = None,
        heart_rate: float | None = None,
        respiratory_rate: float | None = None,
        temperature: float | None = None,
        oxygen_saturation: float | None = None,
        weight: float | None = None,
        height: float | None = None,
        bmi: float | None = None,
        pain_score: int | None = None,
        notes: str | None = None,
    ) -> int:
        """Insert a reading, deriving BMI from height and weight when not given.

        Returns:
            The new vital id.
        """
        if bmi is None:
            bmi = calculate_bmi(weight, height)
        with self.db.transaction() as conn:
            cursor = conn.execute(
                """INSERT INTO vital_signs
                (patient_id, hospital_id, admission_id, recorded_by, recording_date,
                 blood_pressure_systolic, blood_pressure_diastolic, heart_rate,
                 respiratory_rate, temperature, oxygen_saturation, weight, height, bmi,
                 pain_score, notes)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (patient_id, hospital_id, admission_id, recorded_by, self.now().isoformat(),
                 bp_systolic, bp_diastolic, heart_rate, respiratory_rate, temperature,
                 oxygen_saturation, weight, height, bmi, pain_score, notes),
            )
            vital_id = cursor.lastrowid
        logger.info("Recorded vitals %s for patient %s", vital_id, patient_id)
        return vital_id

    def get_latest_vitals(self, patient_id: int) -> VitalSigns | None:
        row = self.db.query_one(
            """SELECT vs.*, sm.first_name || ' ' || sm.last_name AS recorded_by_name
            FROM vital_signs vs
            LEFT JOIN staff_members sm ON vs.recorded_by = sm.staff_id
            WHERE vs.patient_id = ?
            ORDER BY vs.recording_date DESC, vs.vital_id DESC
            LIMIT 1""",
            (patient_id,),
        )
        return row_to_vital_signs(row) if row else None

    def get_vitals_trend(self, patient_id: int, hours: float = 24) -> list[VitalsTrendPoint]:
        """Readings from the last ``hours`` hours, oldest first."""
        since = self.now() - timedelta(hours=hours)
        rows = self.db.query(
            """SELECT recording_date, blood_pressure_systolic, blood_pressure_diastolic,
                      heart_rate, respiratory_rate, temperature, oxygen_saturation, pain_score
            FROM vital_signs
            WHERE patient_id = ? AND recording_date >= ?
            ORDER BY recording_date, vital_id""",
            (patient_id, since.isoformat()),
        )
        return [row_to_trend_point(r) for r in rows]

    def check_abnormal_vitals(self, vital_id: int) -> str:
        """Abnormality summary for one reading, ``"N/A"`` if it does not exist."""
        row = self.db.query_one(
            """SELECT blood_pressure_systolic, blood_pressure_diastolic, heart_rate,
                      respiratory_rate, temperature, oxygen_saturation
            FROM vital_signs WHERE vital_id = ?""",
            (vital_id,),
        )
        if row is None:
            return NOT_AVAILABLE
        return assess_vitals(
            bp_systolic=row["blood_pressure_systolic"],
            bp_diastolic=row["blood_pressure_diastolic"],
            heart_rate=row["heart_rate"],
            respiratory_rate=row["respiratory_rate"],
            temperature=row["temperature"],
            oxygen_saturation=row["oxygen_saturation"],
        )

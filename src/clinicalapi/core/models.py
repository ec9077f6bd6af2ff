"""Data models returned by the clinical services."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from clinicalapi.core.types import (  # noqa: TC001 - Pydantic needs at runtime
    AdmissionStatus,
    BedStatus,
    BillingStatus,
    ClaimStatus,
    TriageStatus,
)


class Bed(BaseModel):
    """A bed and its current occupant."""
    bed_id: int
    hospital_id: int
    room_id: int
    bed_number: str
    bed_type: str | None = None
    bed_status: BedStatus
    current_patient_id: int | None = None
    occupied_date: datetime | None = None


class AvailableBed(BaseModel):
    """Row of the available-beds listing."""
    bed_id: int
    bed_number: str
    room_number: str
    bed_type: str | None = None
    department_name: str
    bed_status: BedStatus


class Admission(BaseModel):
    """A patient's hospital stay."""
    admission_id: int
    patient_id: int
    hospital_id: int
    admission_number: str
    admission_date: datetime
    admission_type: str
    department_id: int
    attending_doctor: int | None = None
    room_id: int | None = None
    bed_id: int | None = None
    admission_source: str | None = None
    admission_status: AdmissionStatus
    discharge_date: datetime | None = None
    discharge_disposition: str | None = None
    discharge_summary: str | None = None


class AdmissionSummary(BaseModel):
    """Row of the current-admissions dashboard."""
    admission_id: int
    admission_number: str
    admission_date: datetime
    patient_number: str
    patient_name: str
    department_name: str
    room_number: str | None = None
    bed_number: str | None = None
    attending_doctor: str | None = None
    admission_status: AdmissionStatus
    length_of_stay_days: int = 0


class VitalSigns(BaseModel):
    """A single vital-signs reading."""
    vital_id: int
    patient_id: int
    hospital_id: int
    admission_id: int | None = None
    recorded_by: int
    recording_date: datetime
    blood_pressure_systolic: float | None = None
    blood_pressure_diastolic: float | None = None
    heart_rate: float | None = None
    respiratory_rate: float | None = None
    temperature: float | None = None
    oxygen_saturation: float | None = None
    weight: float | None = None
    height: float | None = None
    bmi: float | None = None
    pain_score: int | None = None
    notes: str | None = None
    recorded_by_name: str | None = None

    @property
    def blood_pressure(self) -> str:
        """Blood pressure as ``systolic/diastolic``."""
        def fmt(value: float | None) -> str:
            if value is None:
                return ""
            return f"{value:g}"
        return f"{fmt(self.blood_pressure_systolic)}/{fmt(self.blood_pressure_diastolic)}"


class VitalsTrendPoint(BaseModel):
    """One point of a patient's vitals trend."""
    recording_date: datetime
    blood_pressure_systolic: float | None = None
    blood_pressure_diastolic: float | None = None
    heart_rate: float | None = None
    respiratory_rate: float | None = None
    temperature: float | None = None
    oxygen_saturation: float | None = None
    pain_score: int | None = None


class Bill(BaseModel):
    """Bill header with its running totals."""
    bill_id: int
    hospital_id: int
    patient_id: int
    admission_id: int | None = None
    bill_number: str
    bill_date: date
    due_date: date | None = None
    total_amount: float = 0.0
    insurance_amount: float = 0.0
    patient_amount: float = 0.0
    paid_amount: float = 0.0
    billing_status: BillingStatus

    @property
    def balance(self) -> float:
        return round(self.patient_amount - self.paid_amount, 2)


class BillLine(BaseModel):
    """Row of a billing summary."""
    item_id: int
    item_description: str
    item_type: str
    quantity: float
    unit_price: float
    total: float
    service_date: date | None = None


class InsuranceClaim(BaseModel):
    """Claim submitted to an insurer against a bill."""
    claim_detail_id: int
    bill_id: int
    insurance_id: int
    hospital_id: int
    claim_number: str
    claim_date: date
    claim_amount: float
    authorization_number: str | None = None
    claim_status: ClaimStatus
    submission_date: date | None = None


class TriageRecord(BaseModel):
    """Emergency department triage record."""
    triage_id: int
    patient_id: int
    hospital_id: int
    arrival_date: datetime
    arrival_method: str | None = None
    chief_complaint: str
    triage_level: str
    triage_nurse: int | None = None
    pain_score: int | None = None
    triage_start_time: datetime | None = None
    triage_end_time: datetime | None = None
    assigned_to_doctor: int | None = None
    status: TriageStatus
    disposition: str | None = None


class EmergencyBoardEntry(BaseModel):
    """Row of the emergency department tracking board."""
    triage_id: int
    hospital_id: int
    patient_number: str
    patient_name: str
    triage_level: str
    chief_complaint: str
    arrival_date: datetime
    status: TriageStatus
    assigned_doctor: str | None = None
    minutes_waiting: int = Field(default=0, ge=0)

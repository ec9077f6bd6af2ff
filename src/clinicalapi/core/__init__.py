"""Core module - Shared models, enums and errors."""

from __future__ import annotations

from clinicalapi.core.errors import (
    BedUnavailableError,
    ClinicalAPIError,
    InvalidStateError,
    RecordNotFoundError,
)
from clinicalapi.core.models import (
    Admission,
    AdmissionSummary,
    AvailableBed,
    Bed,
    Bill,
    BillLine,
    EmergencyBoardEntry,
    InsuranceClaim,
    TriageRecord,
    VitalSigns,
    VitalsTrendPoint,
)
from clinicalapi.core.types import (
    AdmissionStatus,
    BedStatus,
    BillingStatus,
    BillItemType,
    ClaimStatus,
    PaymentStatus,
    PlanStatus,
    RecordType,
    TriageLevel,
    TriageStatus,
)


__all__ = [
    "Admission",
    "AdmissionStatus",
    "AdmissionSummary",
    "AvailableBed",
    "Bed",
    "BedStatus",
    "BedUnavailableError",
    "Bill",
    "BillItemType",
    "BillLine",
    "BillingStatus",
    "ClaimStatus",
    "ClinicalAPIError",
    "EmergencyBoardEntry",
    "InsuranceClaim",
    "InvalidStateError",
    "PaymentStatus",
    "PlanStatus",
    "RecordNotFoundError",
    "RecordType",
    "TriageLevel",
    "TriageRecord",
    "TriageStatus",
    "VitalSigns",
    "VitalsTrendPoint",
]

"""Core type definitions and enums."""

from __future__ import annotations

from enum import Enum


class AdmissionStatus(str, Enum):
    """Lifecycle of a hospital stay."""

    ADMITTED = "ADMITTED"
    DISCHARGED = "DISCHARGED"


class BedStatus(str, Enum):
    """Occupancy state of a bed."""

    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    MAINTENANCE = "MAINTENANCE"
    RESERVED = "RESERVED"


class RecordType(str, Enum):
    """Medical record entries written by the ADT workflows."""

    ADMISSION_NOTE = "ADMISSION_NOTE"
    DISCHARGE_SUMMARY = "DISCHARGE_SUMMARY"
    TRANSFER = "TRANSFER"


class PlanStatus(str, Enum):
    """Discharge plan state."""

    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class BillingStatus(str, Enum):
    """Bill lifecycle, recomputed on payment."""

    PENDING = "PENDING"
    PARTIAL = "PARTIAL"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class BillItemType(str, Enum):
    """Kinds of bill line items."""

    ROOM_CHARGE = "ROOM_CHARGE"
    MEDICATION = "MEDICATION"
    LAB_TEST = "LAB_TEST"
    PROCEDURE = "PROCEDURE"
    CONSULTATION = "CONSULTATION"
    OTHER = "OTHER"


class PaymentStatus(str, Enum):
    """Payment row state."""

    COMPLETED = "COMPLETED"
    REFUNDED = "REFUNDED"


class ClaimStatus(str, Enum):
    """Insurance claim state."""

    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    DENIED = "DENIED"


class TriageLevel(str, Enum):
    """Emergency Severity Index priority, most urgent first."""

    RESUSCITATION = "RESUSCITATION"
    EMERGENT = "EMERGENT"
    URGENT = "URGENT"
    LESS_URGENT = "LESS_URGENT"
    NON_URGENT = "NON_URGENT"

    @property
    def priority(self) -> int:
        return list(TriageLevel).index(self) + 1


class TriageStatus(str, Enum):
    """Emergency department flow."""

    WAITING = "WAITING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    DISCHARGED = "DISCHARGED"
    ADMITTED = "ADMITTED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_TRIAGE_STATUSES


TERMINAL_TRIAGE_STATUSES = frozenset(
    {TriageStatus.COMPLETED, TriageStatus.DISCHARGED, TriageStatus.ADMITTED}
)

"""Converters for database rows to model objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

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
from clinicalapi.core.utils import days_between, parse_timestamp


if TYPE_CHECKING:
    import sqlite3
    from datetime import datetime


def row_to_bed(row: sqlite3.Row) -> Bed:
    return Bed.model_validate(dict(row))


def row_to_available_bed(row: sqlite3.Row) -> AvailableBed:
    return AvailableBed.model_validate(dict(row))


def row_to_admission(row: sqlite3.Row) -> Admission:
    return Admission.model_validate(dict(row))


def row_to_admission_summary(row: sqlite3.Row, now: datetime) -> AdmissionSummary:
    """Convert a dashboard row, deriving length of stay against ``now``."""
    data = dict(row)
    admitted = parse_timestamp(data["admission_date"])
    ended = parse_timestamp(data.pop("discharge_date", None)) or now
    data["length_of_stay_days"] = days_between(admitted, ended) if admitted else 0
    return AdmissionSummary.model_validate(data)


def row_to_vital_signs(row: sqlite3.Row) -> VitalSigns:
    return VitalSigns.model_validate(dict(row))


def row_to_trend_point(row: sqlite3.Row) -> VitalsTrendPoint:
    return VitalsTrendPoint.model_validate(dict(row))


def row_to_bill(row: sqlite3.Row) -> Bill:
    return Bill.model_validate(dict(row))


def row_to_bill_line(row: sqlite3.Row) -> BillLine:
    return BillLine.model_validate(dict(row))


def row_to_claim(row: sqlite3.Row) -> InsuranceClaim:
    return InsuranceClaim.model_validate(dict(row))


def row_to_triage(row: sqlite3.Row) -> TriageRecord:
    return TriageRecord.model_validate(dict(row))


def row_to_board_entry(row: sqlite3.Row, now: datetime) -> EmergencyBoardEntry:
    """Convert a tracking-board row, deriving minutes waiting against ``now``."""
    data = dict(row)
    arrived = parse_timestamp(data["arrival_date"])
    waited = (now - arrived).total_seconds() // 60 if arrived else 0
    data["minutes_waiting"] = max(int(waited), 0)
    return EmergencyBoardEntry.model_validate(data)

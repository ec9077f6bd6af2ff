"""Utility functions shared by the clinical services."""

from __future__ import annotations

import math
from datetime import date, datetime


def format_document_number(prefix: str, when: date, sequence: int, width: int) -> str:
    """Build a dated document number such as ``ADM-20240115-00042``.

    Args:
        prefix: Document kind prefix (ADM, BILL, CLM).
        when: Date stamped into the number.
        sequence: Row sequence, zero padded.
        width: Pad width for the sequence.

    Returns:
        Formatted document number.
    """
    return f"{prefix}-{when:%Y%m%d}-{sequence:0{width}d}"


def days_between(start: datetime, end: datetime) -> int:
    """Whole days between two timestamps, rounding half days up."""
    days = (end - start).total_seconds() / 86400
    return int(math.floor(days + 0.5)) if days >= 0 else -int(math.floor(-days + 0.5))


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware timestamp to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an ISO timestamp stored in SQLite as naive local time."""
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(value)
    return to_local_naive(value)


def parse_date(value: str | date | None) -> date | None:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])

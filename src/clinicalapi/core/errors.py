"""Exceptions raised by the clinical services."""

from __future__ import annotations


class ClinicalAPIError(Exception):
    """Base class for clinical workflow errors."""


class RecordNotFoundError(ClinicalAPIError, LookupError):
    """A required row does not exist."""

    def __init__(self, entity: str, key: object) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")


class BedUnavailableError(ClinicalAPIError):
    """Attempt to place a patient in a bed that is not available."""

    def __init__(self, bed_id: int, status: str) -> None:
        self.bed_id = bed_id
        self.status = status
        super().__init__(f"Bed {bed_id} is not available (status: {status})")


class InvalidStateError(ClinicalAPIError):
    """Operation not permitted in the record's current status."""

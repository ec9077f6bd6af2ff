"""Services module - Clinical workflow implementations."""

from __future__ import annotations

from clinicalapi.services.admission import AdmissionService
from clinicalapi.services.billing import BillingService
from clinicalapi.services.emergency import EmergencyService
from clinicalapi.services.vitals import VitalSignsService


__all__ = [
    "AdmissionService",
    "BillingService",
    "EmergencyService",
    "VitalSignsService",
]

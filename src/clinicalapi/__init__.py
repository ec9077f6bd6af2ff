"""clinicalapi - Hospital clinical workflow services.

This package provides transactional services for:
- Admitting, discharging and transferring inpatients
- Recording vital signs and flagging abnormal readings
- Generating bills, taking payments and submitting insurance claims
- Registering and tracking emergency department arrivals
"""

from __future__ import annotations

from clinicalapi.api import ClinicalAPI
from clinicalapi.config.settings import Settings
from clinicalapi.core.errors import (
    BedUnavailableError,
    ClinicalAPIError,
    InvalidStateError,
    RecordNotFoundError,
)
from clinicalapi.services import (
    AdmissionService,
    BillingService,
    EmergencyService,
    VitalSignsService,
)
from clinicalapi.storage.database import HospitalDatabase


__version__ = "0.1.0"

__all__ = [
    "AdmissionService",
    "BedUnavailableError",
    "BillingService",
    "ClinicalAPI",
    "ClinicalAPIError",
    "EmergencyService",
    "HospitalDatabase",
    "InvalidStateError",
    "RecordNotFoundError",
    "Settings",
    "VitalSignsService",
]

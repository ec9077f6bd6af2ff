"""Emergency service."""

from clinicalapi.services.emergency.service import EmergencyService

__all__ = ["EmergencyService"]

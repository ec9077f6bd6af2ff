"""Admission service."""

from clinicalapi.services.admission.service import AdmissionService

__all__ = ["AdmissionService"]

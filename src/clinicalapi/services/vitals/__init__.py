"""Vitals service."""

from clinicalapi.services.vitals.service import VitalSignsService, assess_vitals, calculate_bmi

__all__ = ["VitalSignsService", "assess_vitals", "calculate_bmi"]

"""Billing service."""

from clinicalapi.services.billing.service import BillingService

__all__ = ["BillingService"]

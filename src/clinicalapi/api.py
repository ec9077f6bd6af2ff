"""Facade composing the clinical services over one database."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from clinicalapi.config.settings import Settings
from clinicalapi.services import (
    AdmissionService,
    BillingService,
    EmergencyService,
    VitalSignsService,
)
from clinicalapi.storage.database import HospitalDatabase


if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

logger = logging.getLogger(__name__)


class ClinicalAPI:
    """Entry point exposing the admission, vitals, billing and emergency services."""

    def __init__(
        self,
        settings: Settings | None = None,
        db: HospitalDatabase | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if settings is None:
            settings = Settings()
        self.settings = settings
        self.db = db or HospitalDatabase.from_settings(settings)

        self.admissions = AdmissionService(self.db, settings, clock)
        self.vitals = VitalSignsService(self.db, settings, clock)
        self.billing = BillingService(self.db, settings, clock)
        self.emergency = EmergencyService(self.db, settings, clock)
        logger.debug("Clinical API bound to %s", self.db.db_path)

    def stats(self) -> dict[str, int]:
        return self.db.get_stats()

"""Storage layer for the hospital schema."""

from clinicalapi.storage.database import HospitalDatabase
from clinicalapi.storage.schema import INIT_SCHEMA

__all__ = ["INIT_SCHEMA", "HospitalDatabase"]

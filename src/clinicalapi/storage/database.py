"""SQLite hospital database with per-call transactions."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from clinicalapi.storage.schema import INIT_SCHEMA


if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from clinicalapi.config.settings import Settings

logger = logging.getLogger(__name__)


class HospitalDatabase:
    """SQLite database holding the hospital schema.

    Every public service call runs inside :meth:`transaction`, which commits on
    success and rolls back and re-raises on any error. ``:memory:`` paths are
    not supported because each call opens its own connection.
    """

    def __init__(self, db_path: str | Path = "hospital.db", timeout: float = 5.0) -> None:
        self.db_path = Path(db_path)
        self.timeout = timeout
        self._init_db()

    @classmethod
    def from_settings(cls, settings: Settings) -> HospitalDatabase:
        return cls(settings.database.path, timeout=settings.database.timeout)

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path, timeout=self.timeout, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run statements as one all-or-nothing unit of work.

        The write lock is taken up front so concurrent writers wait for it,
        up to ``timeout`` seconds, instead of failing on lock upgrade.
        """
        with self._connection() as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except Exception:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")

    def _init_db(self) -> None:
        with self._connection() as conn:
            conn.executescript(INIT_SCHEMA)

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        """Run a read-only query and return all rows."""
        with self._connection() as conn:
            return conn.execute(sql, params).fetchall()

    def query_one(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Row | None:
        with self._connection() as conn:
            return conn.execute(sql, params).fetchone()

    def load_sample_data(self) -> None:
        """Load reference data for a demo hospital."""
        with self.transaction() as conn:
            # Check if data exists
            count = conn.execute("SELECT COUNT(*) FROM hospitals").fetchone()[0]
            if count > 0:
                return

            conn.execute(
                "INSERT INTO hospitals (hospital_id, hospital_name, hospital_code) VALUES (?, ?, ?)",
                (1, "City General Hospital", "CGH"),
            )

            conn.executemany(
                "INSERT INTO departments (department_id, hospital_id, department_name, department_code) "
                "VALUES (?, ?, ?, ?)",
                [
                    (1, 1, "Cardiology", "CARD"),
                    (2, 1, "General Medicine", "GMED"),
                    (3, 1, "Emergency", "ER"),
                ],
            )

            conn.executemany(
                "INSERT INTO rooms (room_id, hospital_id, department_id, room_number, room_type) "
                "VALUES (?, ?, ?, ?, ?)",
                [
                    (1, 1, 1, "C-101", "WARD"),
                    (2, 1, 1, "C-102", "ICU"),
                    (3, 1, 2, "M-201", "WARD"),
                    (4, 1, 3, "E-001", "BAY"),
                ],
            )

            conn.executemany(
                "INSERT INTO beds (bed_id, hospital_id, room_id, bed_number, bed_type, bed_status) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                [
                    (1, 1, 1, "C-101-A", "GENERAL", "AVAILABLE"),
                    (2, 1, 1, "C-101-B", "GENERAL", "AVAILABLE"),
                    (3, 1, 2, "C-102-A", "ICU", "AVAILABLE"),
                    (4, 1, 3, "M-201-A", "GENERAL", "AVAILABLE"),
                    (5, 1, 3, "M-201-B", "GENERAL", "MAINTENANCE"),
                    (6, 1, 4, "E-001-A", "TROLLEY", "AVAILABLE"),
                ],
            )

            conn.executemany(
                "INSERT INTO staff_members (staff_id, hospital_id, first_name, last_name, staff_role) "
                "VALUES (?, ?, ?, ?, ?)",
                [
                    (1, 1, "Amara", "Okafor", "DOCTOR"),
                    (2, 1, "Daniel", "Reyes", "DOCTOR"),
                    (3, 1, "Priya", "Nair", "NURSE"),
                    (4, 1, "Tom", "Becker", "NURSE"),
                ],
            )

            conn.executemany(
                "INSERT INTO patients (patient_id, hospital_id, patient_number, first_name, last_name, "
                "date_of_birth, gender) VALUES (?, ?, ?, ?, ?, ?, ?)",
                [
                    (1, 1, "P0001", "Lena", "Fischer", "1958-04-12", "F"),
                    (2, 1, "P0002", "Samuel", "Adeyemi", "1971-09-30", "M"),
                    (3, 1, "P0003", "Grace", "Lindqvist", "1990-01-22", "F"),
                    (4, 1, "P0004", "Omar", "Haddad", "1985-06-05", "M"),
                ],
            )

            conn.executemany(
                "INSERT INTO medications (medication_id, medication_name, cost_price) VALUES (?, ?, ?)",
                [
                    (1, "Amoxicillin 500mg", 2.50),
                    (2, "Metoprolol 50mg", 1.25),
                    (3, "Paracetamol 1g", 0.40),
                ],
            )

            conn.executemany(
                "INSERT INTO lab_tests (test_id, test_name, test_cost) VALUES (?, ?, ?)",
                [
                    (1, "Complete Blood Count", 35.0),
                    (2, "Troponin I", 80.0),
                    (3, "Basic Metabolic Panel", 45.0),
                ],
            )

            conn.execute(
                "INSERT INTO insurance_providers (insurance_id, provider_name) VALUES (?, ?)",
                (1, "National Health Mutual"),
            )
        logger.info("Sample data loaded into %s", self.db_path)

    def get_stats(self) -> dict[str, int]:
        """Get database statistics."""
        with self._connection() as conn:
            return {
                "patients": conn.execute("SELECT COUNT(*) FROM patients").fetchone()[0],
                "admitted": conn.execute(
                    "SELECT COUNT(*) FROM patient_admissions WHERE admission_status = 'ADMITTED'"
                ).fetchone()[0],
                "beds_available": conn.execute(
                    "SELECT COUNT(*) FROM beds WHERE bed_status = 'AVAILABLE'"
                ).fetchone()[0],
                "beds_occupied": conn.execute(
                    "SELECT COUNT(*) FROM beds WHERE bed_status = 'OCCUPIED'"
                ).fetchone()[0],
                "open_bills": conn.execute(
                    "SELECT COUNT(*) FROM billing WHERE billing_status IN ('PENDING', 'PARTIAL')"
                ).fetchone()[0],
                "emergency_active": conn.execute(
                    "SELECT COUNT(*) FROM emergency_triage WHERE status IN ('WAITING', 'IN_PROGRESS')"
                ).fetchone()[0],
            }

"""Base class for the clinical services."""

from __future__ import annotations

from abc import ABC
from datetime import datetime
from typing import TYPE_CHECKING, Any

from clinicalapi.config.settings import Settings
from clinicalapi.core.errors import RecordNotFoundError
from clinicalapi.core.utils import to_local_naive


if TYPE_CHECKING:
    import sqlite3
    from collections.abc import Callable, Sequence

    from clinicalapi.storage.database import HospitalDatabase


class Service(ABC):  # noqa: B024 - shared plumbing only
    """Shared plumbing for services bound to one hospital database.

    Subclasses issue their writes inside ``self.db.transaction()`` so that a
    failure at any statement leaves the database untouched.
    """

    def __init__(
        self,
        db: HospitalDatabase,
        settings: Settings | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.db = db
        self.settings = settings or Settings()
        self._clock = clock or datetime.now

    def now(self) -> datetime:
        return to_local_naive(self._clock())

    @staticmethod
    def _require(
        conn: sqlite3.Connection, sql: str, params: Sequence[Any], entity: str, key: object
    ) -> sqlite3.Row:
        """Fetch exactly one row or raise :class:`RecordNotFoundError`."""
        row = conn.execute(sql, params).fetchone()
        if row is None:
            raise RecordNotFoundError(entity, key)
        return row

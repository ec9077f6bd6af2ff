"""Tests for emergency department triage."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from clinicalapi.core.errors import RecordNotFoundError
from clinicalapi.core.types import TriageLevel, TriageStatus


if TYPE_CHECKING:
    from clinicalapi.api import ClinicalAPI
    from tests.conftest import FakeClock


def _register(api: ClinicalAPI, patient_id: int, level: str, complaint: str = "Pain") -> int:
    return api.emergency.register_emergency_patient(
        patient_id=patient_id,
        hospital_id=1,
        arrival_method="WALK_IN",
        chief_complaint=complaint,
        triage_level=level,
        triage_nurse=3,
        pain_score=5,
    )


class TestRegistration:
    def test_starts_waiting(self, api: ClinicalAPI, clock: FakeClock) -> None:
        triage_id = _register(api, 2, "URGENT", "Abdominal pain")
        record = api.emergency.get_triage(triage_id)
        assert record.status == TriageStatus.WAITING
        assert record.arrival_date == clock.current
        assert record.triage_start_time == clock.current
        assert record.triage_end_time is None
        assert record.assigned_to_doctor is None

    def test_invalid_level(self, api: ClinicalAPI) -> None:
        with pytest.raises(ValueError):
            _register(api, 2, "SEVERE")
        assert api.db.query_one("SELECT COUNT(*) FROM emergency_triage")[0] == 0

    def test_level_priority(self) -> None:
        assert TriageLevel.RESUSCITATION.priority == 1
        assert TriageLevel.NON_URGENT.priority == 5


class TestTriageFlow:
    """Assignment and status transitions."""

    def test_assign_moves_in_progress(self, api: ClinicalAPI) -> None:
        triage_id = _register(api, 2, "EMERGENT")
        api.emergency.assign_to_doctor(triage_id, doctor_id=2)
        record = api.emergency.get_triage(triage_id)
        assert record.status == TriageStatus.IN_PROGRESS
        assert record.assigned_to_doctor == 2

    def test_assign_unknown(self, api: ClinicalAPI) -> None:
        with pytest.raises(RecordNotFoundError):
            api.emergency.assign_to_doctor(404, doctor_id=2)

    @pytest.mark.parametrize("status", ["COMPLETED", "DISCHARGED", "ADMITTED"])
    def test_terminal_status_stamps_end(
        self, api: ClinicalAPI, clock: FakeClock, status: str
    ) -> None:
        triage_id = _register(api, 2, "URGENT")
        clock.advance(minutes=95)
        api.emergency.update_triage_status(triage_id, status, disposition="Home")
        record = api.emergency.get_triage(triage_id)
        assert record.status == TriageStatus(status)
        assert record.triage_end_time == clock.current
        assert record.disposition == "Home"

    def test_non_terminal_keeps_end_and_disposition(self, api: ClinicalAPI) -> None:
        triage_id = _register(api, 2, "URGENT")
        api.emergency.update_triage_status(triage_id, TriageStatus.IN_PROGRESS, disposition="Obs")
        api.emergency.update_triage_status(triage_id, TriageStatus.WAITING)
        record = api.emergency.get_triage(triage_id)
        assert record.triage_end_time is None
        assert record.disposition == "Obs"

    def test_invalid_status(self, api: ClinicalAPI) -> None:
        triage_id = _register(api, 2, "URGENT")
        with pytest.raises(ValueError):
            api.emergency.update_triage_status(triage_id, "LEFT")
        assert api.emergency.get_triage(triage_id).status == TriageStatus.WAITING

    def test_update_unknown(self, api: ClinicalAPI) -> None:
        with pytest.raises(RecordNotFoundError):
            api.emergency.update_triage_status(404, "COMPLETED")


class TestEmergencyBoard:
    def test_ordered_by_priority_then_arrival(self, api: ClinicalAPI, clock: FakeClock) -> None:
        first_urgent = _register(api, 1, "URGENT")
        clock.advance(minutes=5)
        non_urgent = _register(api, 2, "NON_URGENT")
        clock.advance(minutes=5)
        second_urgent = _register(api, 3, "URGENT")
        clock.advance(minutes=5)
        resus = _register(api, 4, "RESUSCITATION")

        board = api.emergency.get_emergency_board(1)
        assert [e.triage_id for e in board] == [resus, first_urgent, second_urgent, non_urgent]

    def test_only_active_rows(self, api: ClinicalAPI) -> None:
        waiting = _register(api, 1, "URGENT")
        seen = _register(api, 2, "URGENT")
        done = _register(api, 3, "URGENT")
        api.emergency.assign_to_doctor(seen, doctor_id=1)
        api.emergency.update_triage_status(done, "DISCHARGED")

        board = {e.triage_id: e for e in api.emergency.get_emergency_board(1)}
        assert set(board) == {waiting, seen}
        assert board[seen].assigned_doctor == "Amara Okafor"
        assert board[waiting].assigned_doctor is None
        assert board[waiting].patient_name == "Lena Fischer"

    def test_minutes_waiting(self, api: ClinicalAPI, clock: FakeClock) -> None:
        _register(api, 1, "LESS_URGENT")
        clock.advance(minutes=42, seconds=30)
        (entry,) = api.emergency.get_emergency_board(1)
        assert entry.minutes_waiting == 42

    def test_other_hospital_empty(self, api: ClinicalAPI) -> None:
        _register(api, 1, "URGENT")
        assert api.emergency.get_emergency_board(2) == []

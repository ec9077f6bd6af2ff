"""Tests for the hospital database layer."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

import pytest

from clinicalapi.core.types import TriageStatus


if TYPE_CHECKING:
    from clinicalapi.api import ClinicalAPI


def test_transaction_rolls_back_on_error(api: ClinicalAPI) -> None:
    with pytest.raises(RuntimeError), api.db.transaction() as conn:
        conn.execute("UPDATE beds SET bed_status = 'RESERVED' WHERE bed_id = 1")
        raise RuntimeError("abort")
    assert api.db.query_one("SELECT bed_status FROM beds WHERE bed_id = 1")[0] == "AVAILABLE"


def test_sample_data_loads_once(api: ClinicalAPI) -> None:
    api.db.load_sample_data()
    assert api.db.get_stats()["patients"] == 4


def test_concurrent_writers_wait_for_lock(api: ClinicalAPI, admission_id: int) -> None:
    bill_id = api.billing.generate_bill(
        admission_id, hospital_id=1, patient_id=1, include_medications=False, include_lab=False
    )
    rounds = 15

    def worker(patient_id: int) -> None:
        for _ in range(rounds):
            triage_id = api.emergency.register_emergency_patient(
                patient_id=patient_id, hospital_id=1, arrival_method="WALK_IN",
                chief_complaint="Cough", triage_level="NON_URGENT", triage_nurse=3,
            )
            api.emergency.assign_to_doctor(triage_id, doctor_id=2)
            api.billing.process_payment(bill_id, 1, "CASH")

    with ThreadPoolExecutor(max_workers=6) as pool:
        futures = [pool.submit(worker, 1 + i % 4) for i in range(6)]
        for future in futures:
            future.result()

    assert api.db.query_one("SELECT COUNT(*) FROM payments")[0] == 6 * rounds
    assert api.billing.get_bill(bill_id).paid_amount == pytest.approx(6 * rounds)
    in_progress = api.db.query_one(
        "SELECT COUNT(*) FROM emergency_triage WHERE status = ?",
        (TriageStatus.IN_PROGRESS.value,),
    )[0]
    assert in_progress == 6 * rounds

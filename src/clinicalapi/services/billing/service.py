"""Billing, payments and insurance claims."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import TYPE_CHECKING

from clinicalapi.core.errors import InvalidStateError, RecordNotFoundError
from clinicalapi.core.service import Service
from clinicalapi.core.types import (
    BillingStatus,
    BillItemType,
    ClaimStatus,
    PaymentStatus,
)
from clinicalapi.core.utils import days_between, format_document_number, parse_timestamp
from clinicalapi.storage.converters import row_to_bill, row_to_bill_line, row_to_claim


if TYPE_CHECKING:
    import sqlite3

    from clinicalapi.core.models import Bill, BillLine, InsuranceClaim

logger = logging.getLogger(__name__)

BILL_NUMBER_WIDTH = 6
CLAIM_NUMBER_WIDTH = 6


class BillingService(Service):
    """Generates bills from a stay's charges and settles them."""

    def generate_bill(
        self,
        admission_id: int,
        hospital_id: int,
        patient_id: int,
        include_services: bool = True,
        include_medications: bool = True,
        include_lab: bool = True,
    ) -> int:
        """Create a PENDING bill from the admission's room, drug and lab charges.

        Room charges are billed per day of stay at the configured daily rate,
        dispensed medications at cost plus markup, and each lab order at the
        test cost.

        Returns:
            The new bill id.
        """
        tariffs = self.settings.billing
        now = self.now()
        today = now.date()
        with self.db.transaction() as conn:
            cursor = conn.execute(
                """INSERT INTO billing
                (hospital_id, patient_id, admission_id, bill_date, billing_status)
                VALUES (?, ?, ?, ?, ?)""",
                (hospital_id, patient_id, admission_id, today.isoformat(),
                 BillingStatus.PENDING.value),
            )
            bill_id = cursor.lastrowid
            conn.execute(
                "UPDATE billing SET bill_number = ? WHERE bill_id = ?",
                (format_document_number("BILL", today, bill_id, BILL_NUMBER_WIDTH), bill_id),
            )

            if include_services:
                stay = conn.execute(
                    """SELECT pa.admission_date, pa.discharge_date, d.department_name
                    FROM patient_admissions pa
                    JOIN departments d ON pa.department_id = d.department_id
                    WHERE pa.admission_id = ?""",
                    (admission_id,),
                ).fetchone()
                if stay is not None:
                    admitted = parse_timestamp(stay["admission_date"])
                    ended = parse_timestamp(stay["discharge_date"]) or now
                    self._insert_item(
                        conn, bill_id, BillItemType.ROOM_CHARGE,
                        f"Room Charge - {stay['department_name']}",
                        days_between(admitted, ended), tariffs.room_charge_per_day,
                        admitted.date(),
                    )

            if include_medications:
                conn.execute(
                    """INSERT INTO billing_items
                    (bill_id, item_type, item_description, quantity, unit_price, service_date)
                    SELECT ?, ?, m.medication_name, pr.dispensed_quantity,
                           m.cost_price * ?, DATE(pr.dispensed_date)
                    FROM prescriptions pr
                    JOIN medications m ON pr.medication_id = m.medication_id
                    WHERE pr.admission_id = ? AND pr.dispensed_quantity > 0""",
                    (bill_id, BillItemType.MEDICATION.value, tariffs.medication_markup,
                     admission_id),
                )

            if include_lab:
                conn.execute(
                    """INSERT INTO billing_items
                    (bill_id, item_type, item_description, quantity, unit_price, service_date)
                    SELECT ?, ?, lt.test_name, 1, lt.test_cost, DATE(lo.order_date)
                    FROM lab_orders lo
                    JOIN lab_tests lt ON lo.test_id = lt.test_id
                    WHERE lo.admission_id = ?""",
                    (bill_id, BillItemType.LAB_TEST.value, admission_id),
                )

            total = self._recalculate_total(conn, bill_id)
            conn.execute(
                "UPDATE billing SET due_date = ? WHERE bill_id = ?",
                ((today + timedelta(days=tariffs.due_days)).isoformat(), bill_id),
            )

        logger.info("Generated bill %s for admission %s: %.2f", bill_id, admission_id, total)
        return bill_id

    def add_bill_item(
        self,
        bill_id: int,
        item_type: BillItemType | str,
        item_description: str,
        quantity: float,
        unit_price: float,
        service_date: date | None = None,
    ) -> int:
        """Append a line item and recompute the bill total.

        Returns:
            The new item id.
        """
        item_type = BillItemType(item_type)
        with self.db.transaction() as conn:
            bill = self._require(
                conn, "SELECT billing_status FROM billing WHERE bill_id = ?",
                (bill_id,), "Bill", bill_id,
            )
            if bill["billing_status"] in (BillingStatus.PAID.value, BillingStatus.CANCELLED.value):
                raise InvalidStateError(f"Bill {bill_id} is {bill['billing_status']}")
            item_id = self._insert_item(
                conn, bill_id, item_type, item_description, quantity, unit_price,
                service_date or self.now().date(),
            )
            total = self._recalculate_total(conn, bill_id)
        logger.info("Added %s item to bill %s, total now %.2f", item_type.value, bill_id, total)
        return item_id

    def process_payment(
        self,
        bill_id: int,
        payment_amount: float,
        payment_method: str,
        reference_number: str | None = None,
        received_by: int | None = None,
    ) -> int:
        """Record a completed payment; bill status follows via the payment trigger.

        Returns:
            The new payment id.
        """
        if payment_amount <= 0:
            raise ValueError(f"Payment amount must be positive, got {payment_amount}")
        with self.db.transaction() as conn:
            bill = self._require(
                conn, "SELECT hospital_id, patient_id FROM billing WHERE bill_id = ?",
                (bill_id,), "Bill", bill_id,
            )
            cursor = conn.execute(
                """INSERT INTO payments
                (bill_id, hospital_id, patient_id, payment_date, payment_amount,
                 payment_method, reference_number, received_by, payment_status)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (bill_id, bill["hospital_id"], bill["patient_id"], self.now().isoformat(),
                 payment_amount, payment_method, reference_number, received_by,
                 PaymentStatus.COMPLETED.value),
            )
            payment_id = cursor.lastrowid
        logger.info("Payment %s of %.2f recorded against bill %s", payment_id, payment_amount, bill_id)
        return payment_id

    def submit_insurance_claim(
        self,
        bill_id: int,
        insurance_id: int,
        claim_amount: float,
        authorization_number: str | None = None,
    ) -> int:
        """Submit a claim and split the bill between insurer and patient.

        Returns:
            The new claim id.
        """
        today = self.now().date()
        with self.db.transaction() as conn:
            bill = self._require(
                conn, "SELECT hospital_id, total_amount FROM billing WHERE bill_id = ?",
                (bill_id,), "Bill", bill_id,
            )
            if claim_amount < 0 or claim_amount > bill["total_amount"]:
                raise ValueError(
                    f"Claim amount {claim_amount} outside bill total {bill['total_amount']}"
                )
            cursor = conn.execute(
                """INSERT INTO insurance_claim_details
                (bill_id, insurance_id, hospital_id, claim_date, claim_amount,
                 authorization_number, claim_status, submission_date)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (bill_id, insurance_id, bill["hospital_id"], today.isoformat(), claim_amount,
                 authorization_number, ClaimStatus.SUBMITTED.value, today.isoformat()),
            )
            claim_id = cursor.lastrowid
            conn.execute(
                "UPDATE insurance_claim_details SET claim_number = ? WHERE claim_detail_id = ?",
                (format_document_number("CLM", today, claim_id, CLAIM_NUMBER_WIDTH), claim_id),
            )
            conn.execute(
                """UPDATE billing
                SET insurance_amount = ?, patient_amount = total_amount - ?
                WHERE bill_id = ?""",
                (claim_amount, claim_amount, bill_id),
            )
            self._refresh_status(conn, bill_id)
        logger.info("Claim %s submitted for bill %s: %.2f", claim_id, bill_id, claim_amount)
        return claim_id

    def get_patient_balance(self, patient_id: int, hospital_id: int) -> float:
        """Outstanding patient share across open bills."""
        row = self.db.query_one(
            """SELECT COALESCE(SUM(
                    b.patient_amount - COALESCE((
                        SELECT SUM(p.payment_amount) FROM payments p
                        WHERE p.bill_id = b.bill_id AND p.payment_status = 'COMPLETED'
                    ), 0)
                ), 0) AS balance
            FROM billing b
            WHERE b.patient_id = ? AND b.hospital_id = ?
              AND b.billing_status NOT IN ('PAID', 'CANCELLED')""",
            (patient_id, hospital_id),
        )
        return round(row["balance"], 2)

    def get_billing_summary(self, bill_id: int) -> list[BillLine]:
        rows = self.db.query(
            """SELECT item_id, item_description, item_type, quantity, unit_price,
                      quantity * unit_price AS total, service_date
            FROM billing_items
            WHERE bill_id = ?
            ORDER BY service_date, item_type, item_id""",
            (bill_id,),
        )
        return [row_to_bill_line(r) for r in rows]

    def get_bill(self, bill_id: int) -> Bill:
        row = self.db.query_one("SELECT * FROM billing WHERE bill_id = ?", (bill_id,))
        if row is None:
            raise RecordNotFoundError("Bill", bill_id)
        return row_to_bill(row)

    def get_claim(self, claim_id: int) -> InsuranceClaim:
        row = self.db.query_one(
            "SELECT * FROM insurance_claim_details WHERE claim_detail_id = ?", (claim_id,)
        )
        if row is None:
            raise RecordNotFoundError("Insurance claim", claim_id)
        return row_to_claim(row)

    @staticmethod
    def _insert_item(
        conn: sqlite3.Connection,
        bill_id: int,
        item_type: BillItemType,
        description: str,
        quantity: float,
        unit_price: float,
        service_date: date | None,
    ) -> int:
        cursor = conn.execute(
            """INSERT INTO billing_items
            (bill_id, item_type, item_description, quantity, unit_price, service_date)
            VALUES (?, ?, ?, ?, ?, ?)""",
            (bill_id, item_type.value, description, quantity, unit_price,
             service_date.isoformat() if service_date else None),
        )
        return cursor.lastrowid

    @staticmethod
    def _refresh_status(conn: sqlite3.Connection, bill_id: int) -> None:
        """Re-derive PARTIAL/PAID from payments already received."""
        conn.execute(
            """UPDATE billing
            SET billing_status = CASE
                    WHEN paid_amount > 0 AND paid_amount >= patient_amount THEN 'PAID'
                    WHEN paid_amount > 0 THEN 'PARTIAL'
                    ELSE billing_status
                END
            WHERE bill_id = ? AND billing_status != 'CANCELLED'""",
            (bill_id,),
        )

    @staticmethod
    def _recalculate_total(conn: sqlite3.Connection, bill_id: int) -> float:
        """Set the bill total to the sum of its line items, preserving the insurer share."""
        total = conn.execute(
            "SELECT COALESCE(SUM(quantity * unit_price), 0) FROM billing_items WHERE bill_id = ?",
            (bill_id,),
        ).fetchone()[0]
        conn.execute(
            """UPDATE billing
            SET total_amount = ?, patient_amount = ? - insurance_amount
            WHERE bill_id = ?""",
            (total, total, bill_id),
        )
        return total

"""Command-line interface for clinicalapi."""

from __future__ import annotations

import argparse
import sys
from datetime import date, datetime
from typing import TYPE_CHECKING

from clinicalapi.api import ClinicalAPI
from clinicalapi.config.settings import Settings
from clinicalapi.console.logger import ClinicalConsole
from clinicalapi.core.types import AdmissionStatus, BillItemType, TriageLevel, TriageStatus


if TYPE_CHECKING:
    from collections.abc import Sequence

console = ClinicalConsole()


def _bool_flag(value: str) -> bool:
    return value.strip().upper() in ("Y", "YES", "TRUE", "1")


def init_db(api: ClinicalAPI, load_sample: bool) -> None:
    """Create the schema and optionally seed reference data."""
    if load_sample:
        api.db.load_sample_data()
    console.print_success(f"Hospital database initialized at {api.db.db_path}")
    console.print_db_stats(api.stats())


def run_admission_command(api: ClinicalAPI, args: argparse.Namespace) -> None:
    svc = api.admissions
    if args.command == "admit":
        admission_id = svc.admit_patient(
            patient_id=args.patient, hospital_id=args.hospital,
            admission_type=args.type, department_id=args.department,
            attending_doctor=args.doctor, room_id=args.room, bed_id=args.bed,
            chief_complaint=args.complaint, admission_source=args.source,
            preliminary_diagnosis=args.diagnosis,
        )
        admission = svc.get_admission(admission_id)
        console.print_created("Admission", admission.admission_number)
    elif args.command == "discharge":
        svc.discharge_patient(
            admission_id=args.admission,
            discharge_date=args.date or datetime.now(),
            discharge_disposition=args.disposition,
            final_diagnosis=args.diagnosis,
            discharge_summary=args.summary,
            followup_instructions=args.followup,
            discharge_medications=args.medications,
            diet_instructions=args.diet,
        )
        console.print_success(f"Admission {args.admission} discharged")
    elif args.command == "transfer":
        record_id = svc.transfer_patient(
            admission_id=args.admission, transfer_reason=args.reason,
            new_department_id=args.department, new_room_id=args.room,
            new_bed_id=args.bed, transfer_notes=args.notes,
        )
        console.print_created("Transfer record", record_id)
    elif args.command == "beds":
        console.print_available_beds(
            svc.get_available_beds(args.hospital, args.department, args.bed_type)
        )
    elif args.command == "admissions":
        console.print_admissions(
            svc.get_current_admissions(args.hospital, args.department, args.status)
        )
    elif args.command == "los":
        los = svc.get_length_of_stay(args.admission)
        console.print_value("Length of stay", "N/A" if los is None else f"{los} days")


def run_vitals_command(api: ClinicalAPI, args: argparse.Namespace) -> None:
    svc = api.vitals
    if args.action == "record":
        vital_id = svc.record_vital_signs(
            patient_id=args.patient, hospital_id=args.hospital, recorded_by=args.recorded_by,
            admission_id=args.admission, bp_systolic=args.systolic,
            bp_diastolic=args.diastolic, heart_rate=args.hr, respiratory_rate=args.rr,
            temperature=args.temp, oxygen_saturation=args.spo2, weight=args.weight,
            height=args.height, bmi=args.bmi, pain_score=args.pain, notes=args.notes,
        )
        console.print_created("Vital signs", vital_id)
        console.print_value("Assessment", svc.check_abnormal_vitals(vital_id))
    elif args.action == "latest":
        vitals = svc.get_latest_vitals(args.patient)
        if vitals is None:
            console.print_value("Latest vitals", "N/A")
            return
        console.print_latest_vitals(vitals, svc.check_abnormal_vitals(vitals.vital_id))
    elif args.action == "trend":
        console.print_vitals_trend(svc.get_vitals_trend(args.patient, args.hours))
    elif args.action == "check":
        console.print_value("Assessment", svc.check_abnormal_vitals(args.vital))


def run_billing_command(api: ClinicalAPI, args: argparse.Namespace) -> None:
    svc = api.billing
    if args.action == "generate":
        bill_id = svc.generate_bill(
            admission_id=args.admission, hospital_id=args.hospital, patient_id=args.patient,
            include_services=args.services, include_medications=args.medications,
            include_lab=args.lab,
        )
        console.print_bill(svc.get_bill(bill_id), svc.get_billing_summary(bill_id))
    elif args.action == "add-item":
        svc.add_bill_item(
            bill_id=args.bill, item_type=args.type, item_description=args.description,
            quantity=args.quantity, unit_price=args.price, service_date=args.date,
        )
        console.print_bill(svc.get_bill(args.bill), svc.get_billing_summary(args.bill))
    elif args.action == "pay":
        payment_id = svc.process_payment(
            bill_id=args.bill, payment_amount=args.amount, payment_method=args.method,
            reference_number=args.reference, received_by=args.received_by,
        )
        console.print_created("Payment", payment_id)
        console.print_value("Bill status", svc.get_bill(args.bill).billing_status.value)
    elif args.action == "claim":
        claim_id = svc.submit_insurance_claim(
            bill_id=args.bill, insurance_id=args.insurer, claim_amount=args.amount,
            authorization_number=args.authorization,
        )
        console.print_created("Claim", svc.get_claim(claim_id).claim_number)
    elif args.action == "balance":
        console.print_value(
            "Outstanding balance", f"{svc.get_patient_balance(args.patient, args.hospital):.2f}"
        )
    elif args.action == "summary":
        console.print_bill(svc.get_bill(args.bill), svc.get_billing_summary(args.bill))


def run_emergency_command(api: ClinicalAPI, args: argparse.Namespace) -> None:
    svc = api.emergency
    if args.action == "register":
        triage_id = svc.register_emergency_patient(
            patient_id=args.patient, hospital_id=args.hospital, arrival_method=args.arrival,
            chief_complaint=args.complaint, triage_level=args.level,
            triage_nurse=args.nurse, pain_score=args.pain,
        )
        console.print_created("Triage", triage_id)
    elif args.action == "assign":
        svc.assign_to_doctor(args.triage, args.doctor)
        console.print_success(f"Triage {args.triage} assigned to doctor {args.doctor}")
    elif args.action == "status":
        svc.update_triage_status(args.triage, args.status, args.disposition)
        console.print_success(f"Triage {args.triage} is now {args.status}")
    elif args.action == "board":
        console.print_emergency_board(svc.get_emergency_board(args.hospital))


def build_parser() -> argparse.ArgumentParser:  # noqa: PLR0915
    parser = argparse.ArgumentParser(
        prog="clinicalapi", description="Hospital admission, vitals, billing and triage workflows"
    )
    parser.add_argument("--db", help="Hospital database path (default from settings)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show log output")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_cmd = subparsers.add_parser("init-db", help="Create the hospital schema")
    init_cmd.add_argument("--sample", action="store_true", help="Load sample reference data")

    subparsers.add_parser("stats", help="Show database statistics")

    # Admission / discharge / transfer
    admit = subparsers.add_parser("admit", help="Admit a patient into a bed")
    admit.add_argument("--patient", type=int, required=True)
    admit.add_argument("--hospital", type=int, required=True)
    admit.add_argument("--type", required=True, help="Admission type, e.g. EMERGENCY, ELECTIVE")
    admit.add_argument("--department", type=int, required=True)
    admit.add_argument("--doctor", type=int, required=True, help="Attending doctor staff id")
    admit.add_argument("--room", type=int, required=True)
    admit.add_argument("--bed", type=int, required=True)
    admit.add_argument("--complaint", required=True, help="Chief complaint")
    admit.add_argument("--source", help="Admission source")
    admit.add_argument("--diagnosis", help="Preliminary diagnosis")

    discharge = subparsers.add_parser("discharge", help="Discharge an admitted patient")
    discharge.add_argument("--admission", type=int, required=True)
    discharge.add_argument("--disposition", required=True)
    discharge.add_argument("--diagnosis", required=True, help="Final diagnosis")
    discharge.add_argument("--date", type=datetime.fromisoformat, help="Discharge timestamp")
    discharge.add_argument("--summary")
    discharge.add_argument("--followup")
    discharge.add_argument("--medications")
    discharge.add_argument("--diet")

    transfer = subparsers.add_parser("transfer", help="Transfer a patient")
    transfer.add_argument("--admission", type=int, required=True)
    transfer.add_argument("--reason", required=True)
    transfer.add_argument("--department", type=int)
    transfer.add_argument("--room", type=int)
    transfer.add_argument("--bed", type=int)
    transfer.add_argument("--notes")

    beds = subparsers.add_parser("beds", help="List available beds")
    beds.add_argument("--hospital", type=int, required=True)
    beds.add_argument("--department", type=int)
    beds.add_argument("--bed-type")

    admissions = subparsers.add_parser("admissions", help="List admissions")
    admissions.add_argument("--hospital", type=int, required=True)
    admissions.add_argument("--department", type=int)
    admissions.add_argument(
        "--status", default=AdmissionStatus.ADMITTED.value,
        choices=[s.value for s in AdmissionStatus],
    )

    los = subparsers.add_parser("los", help="Length of stay for an admission")
    los.add_argument("--admission", type=int, required=True)

    # Vital signs
    vitals = subparsers.add_parser("vitals", help="Vital signs")
    vitals_sub = vitals.add_subparsers(dest="action", required=True)
    record = vitals_sub.add_parser("record", help="Record a reading")
    record.add_argument("--patient", type=int, required=True)
    record.add_argument("--hospital", type=int, required=True)
    record.add_argument("--recorded-by", type=int, required=True)
    record.add_argument("--admission", type=int)
    record.add_argument("--systolic", type=float)
    record.add_argument("--diastolic", type=float)
    record.add_argument("--hr", type=float, help="Heart rate")
    record.add_argument("--rr", type=float, help="Respiratory rate")
    record.add_argument("--temp", type=float, help="Temperature in Celsius")
    record.add_argument("--spo2", type=float, help="Oxygen saturation")
    record.add_argument("--weight", type=float, help="Weight in kg")
    record.add_argument("--height", type=float, help="Height in cm")
    record.add_argument("--bmi", type=float)
    record.add_argument("--pain", type=int, help="Pain score 0-10")
    record.add_argument("--notes")
    latest = vitals_sub.add_parser("latest", help="Latest reading for a patient")
    latest.add_argument("--patient", type=int, required=True)
    trend = vitals_sub.add_parser("trend", help="Readings over a window")
    trend.add_argument("--patient", type=int, required=True)
    trend.add_argument("--hours", type=float, default=24)
    check = vitals_sub.add_parser("check", help="Check a reading against normal ranges")
    check.add_argument("--vital", type=int, required=True)

    # Billing
    bill = subparsers.add_parser("bill", help="Billing and payments")
    bill_sub = bill.add_subparsers(dest="action", required=True)
    generate = bill_sub.add_parser("generate", help="Generate a bill for an admission")
    generate.add_argument("--admission", type=int, required=True)
    generate.add_argument("--hospital", type=int, required=True)
    generate.add_argument("--patient", type=int, required=True)
    generate.add_argument("--services", type=_bool_flag, default=True, help="Y/N")
    generate.add_argument("--medications", type=_bool_flag, default=True, help="Y/N")
    generate.add_argument("--lab", type=_bool_flag, default=True, help="Y/N")
    add_item = bill_sub.add_parser("add-item", help="Add a line item")
    add_item.add_argument("--bill", type=int, required=True)
    add_item.add_argument("--type", required=True, choices=[t.value for t in BillItemType])
    add_item.add_argument("--description", required=True)
    add_item.add_argument("--quantity", type=float, required=True)
    add_item.add_argument("--price", type=float, required=True)
    add_item.add_argument("--date", type=date.fromisoformat)
    pay = bill_sub.add_parser("pay", help="Record a payment")
    pay.add_argument("--bill", type=int, required=True)
    pay.add_argument("--amount", type=float, required=True)
    pay.add_argument("--method", required=True)
    pay.add_argument("--reference")
    pay.add_argument("--received-by", type=int)
    claim = bill_sub.add_parser("claim", help="Submit an insurance claim")
    claim.add_argument("--bill", type=int, required=True)
    claim.add_argument("--insurer", type=int, required=True)
    claim.add_argument("--amount", type=float, required=True)
    claim.add_argument("--authorization")
    balance = bill_sub.add_parser("balance", help="Outstanding patient balance")
    balance.add_argument("--patient", type=int, required=True)
    balance.add_argument("--hospital", type=int, required=True)
    summary = bill_sub.add_parser("summary", help="Show a bill")
    summary.add_argument("--bill", type=int, required=True)

    # Emergency
    er = subparsers.add_parser("er", help="Emergency department triage")
    er_sub = er.add_subparsers(dest="action", required=True)
    register = er_sub.add_parser("register", help="Register an emergency arrival")
    register.add_argument("--patient", type=int, required=True)
    register.add_argument("--hospital", type=int, required=True)
    register.add_argument("--arrival", required=True, help="Arrival method")
    register.add_argument("--complaint", required=True)
    register.add_argument("--level", required=True, choices=[lvl.value for lvl in TriageLevel])
    register.add_argument("--nurse", type=int, required=True)
    register.add_argument("--pain", type=int)
    assign = er_sub.add_parser("assign", help="Assign a doctor")
    assign.add_argument("--triage", type=int, required=True)
    assign.add_argument("--doctor", type=int, required=True)
    status = er_sub.add_parser("status", help="Update triage status")
    status.add_argument("--triage", type=int, required=True)
    status.add_argument("--status", required=True, choices=[s.value for s in TriageStatus])
    status.add_argument("--disposition")
    board = er_sub.add_parser("board", help="Show the emergency board")
    board.add_argument("--hospital", type=int, required=True)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    console.verbose = args.verbose
    try:
        settings = Settings()
        if args.db:
            settings.database.path = args.db
        console.setup_logging(settings.log_level)
        api = ClinicalAPI(settings)

        if args.command == "init-db":
            init_db(api, args.sample)
        elif args.command == "stats":
            console.print_db_stats(api.stats())
        elif args.command == "vitals":
            run_vitals_command(api, args)
        elif args.command == "bill":
            run_billing_command(api, args)
        elif args.command == "er":
            run_emergency_command(api, args)
        else:
            run_admission_command(api, args)
    except KeyboardInterrupt:
        console.console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Display components for console output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table


if TYPE_CHECKING:
    from rich.console import Console

    from clinicalapi.core.models import (
        AdmissionSummary,
        AvailableBed,
        Bill,
        BillLine,
        EmergencyBoardEntry,
        VitalSigns,
        VitalsTrendPoint,
    )

TRIAGE_COLORS = {
    "RESUSCITATION": "bold red",
    "EMERGENT": "red",
    "URGENT": "yellow",
    "LESS_URGENT": "green",
    "NON_URGENT": "dim",
}


def _fmt(value: object) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def print_available_beds(console: Console, beds: list[AvailableBed]) -> None:
    """Print available beds."""
    if not beds:
        console.print("  [yellow]⚠[/yellow] No available beds")
        return
    table = Table(title="Available Beds", border_style="blue")
    table.add_column("Bed ID", justify="right", style="dim")
    table.add_column("Bed")
    table.add_column("Room")
    table.add_column("Type")
    table.add_column("Department")
    for bed in beds:
        table.add_row(
            str(bed.bed_id), bed.bed_number, bed.room_number, _fmt(bed.bed_type),
            bed.department_name,
        )
    console.print(table)


def print_admissions(console: Console, admissions: list[AdmissionSummary]) -> None:
    """Print the admissions dashboard."""
    if not admissions:
        console.print("  [yellow]⚠[/yellow] No admissions found")
        return
    table = Table(title="Admissions", border_style="blue")
    table.add_column("Number", style="dim")
    table.add_column("Patient")
    table.add_column("Department")
    table.add_column("Room/Bed")
    table.add_column("Doctor")
    table.add_column("Status")
    table.add_column("LOS", justify="right")
    for adm in admissions:
        table.add_row(
            adm.admission_number,
            f"{adm.patient_name} [dim]({adm.patient_number})[/dim]",
            adm.department_name,
            f"{_fmt(adm.room_number)}/{_fmt(adm.bed_number)}",
            _fmt(adm.attending_doctor),
            adm.admission_status.value,
            f"{adm.length_of_stay_days}d",
        )
    console.print(table)


def print_latest_vitals(console: Console, vitals: VitalSigns, assessment: str) -> None:
    """Print a single reading with its assessment."""
    color = "green" if assessment == "Normal" else "red"
    table = Table(title=f"Latest Vitals (#{vitals.vital_id})", border_style="blue")
    table.add_column("Measure", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Recorded", vitals.recording_date.strftime("%Y-%m-%d %H:%M"))
    table.add_row("Recorded By", _fmt(vitals.recorded_by_name))
    table.add_row("Blood Pressure", vitals.blood_pressure)
    table.add_row("Heart Rate", _fmt(vitals.heart_rate))
    table.add_row("Respiratory Rate", _fmt(vitals.respiratory_rate))
    table.add_row("Temperature", _fmt(vitals.temperature))
    table.add_row("SpO2", _fmt(vitals.oxygen_saturation))
    table.add_row("BMI", f"{vitals.bmi:.1f}" if vitals.bmi is not None else "-")
    table.add_row("Pain", _fmt(vitals.pain_score))
    table.add_row("Assessment", f"[{color}]{assessment}[/{color}]")
    console.print(table)


def print_vitals_trend(console: Console, points: list[VitalsTrendPoint]) -> None:
    """Print a vitals trend."""
    if not points:
        console.print("  [yellow]⚠[/yellow] No readings in window")
        return
    table = Table(title="Vitals Trend", border_style="dim")
    table.add_column("Time")
    table.add_column("BP", justify="right")
    table.add_column("HR", justify="right")
    table.add_column("RR", justify="right")
    table.add_column("Temp", justify="right")
    table.add_column("SpO2", justify="right")
    table.add_column("Pain", justify="right")
    for p in points:
        table.add_row(
            p.recording_date.strftime("%m-%d %H:%M"),
            f"{_fmt(p.blood_pressure_systolic)}/{_fmt(p.blood_pressure_diastolic)}",
            _fmt(p.heart_rate), _fmt(p.respiratory_rate), _fmt(p.temperature),
            _fmt(p.oxygen_saturation), _fmt(p.pain_score),
        )
    console.print(table)


def print_bill(console: Console, bill: Bill, lines: list[BillLine]) -> None:
    """Print a bill with its line items."""
    table = Table(title=f"Bill {bill.bill_number}", border_style="blue")
    table.add_column("Date", style="dim")
    table.add_column("Type")
    table.add_column("Description", width=32)
    table.add_column("Qty", justify="right")
    table.add_column("Unit", justify="right")
    table.add_column("Total", justify="right")
    for line in lines:
        table.add_row(
            _fmt(line.service_date), line.item_type.replace("_", " ").title(),
            line.item_description, _fmt(line.quantity), f"{line.unit_price:.2f}",
            f"{line.total:.2f}",
        )
    console.print(table)
    summary = Table(border_style="dim", show_header=False)
    summary.add_column("Metric", style="bold")
    summary.add_column("Value", justify="right")
    summary.add_row("Total", f"{bill.total_amount:.2f}")
    summary.add_row("Insurance", f"{bill.insurance_amount:.2f}")
    summary.add_row("Patient Share", f"{bill.patient_amount:.2f}")
    summary.add_row("Paid", f"{bill.paid_amount:.2f}")
    summary.add_row("Status", bill.billing_status.value)
    summary.add_row("Due", _fmt(bill.due_date))
    console.print(summary)


def print_emergency_board(console: Console, entries: list[EmergencyBoardEntry]) -> None:
    """Print the emergency tracking board."""
    if not entries:
        console.print("  [green]✓[/green] Emergency department is clear")
        return
    table = Table(title="Emergency Board", border_style="red")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Level")
    table.add_column("Patient")
    table.add_column("Complaint", width=28)
    table.add_column("Status")
    table.add_column("Doctor")
    table.add_column("Waiting", justify="right")
    for e in entries:
        color = TRIAGE_COLORS.get(e.triage_level, "white")
        table.add_row(
            str(e.triage_id),
            f"[{color}]{e.triage_level.replace('_', ' ')}[/{color}]",
            f"{e.patient_name} [dim]({e.patient_number})[/dim]",
            e.chief_complaint,
            e.status.value.replace("_", " "),
            _fmt(e.assigned_doctor),
            f"{e.minutes_waiting}m",
        )
    console.print(table)


def print_db_stats(console: Console, stats: dict[str, int]) -> None:
    """Print database statistics."""
    table = Table(title="Hospital Database Statistics", border_style="blue")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    for key, value in stats.items():
        table.add_row(key.replace("_", " ").title(), str(value))
    console.print()
    console.print(table)

"""Rich console output and logging setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from clinicalapi.console.display import (
    print_admissions,
    print_available_beds,
    print_bill,
    print_db_stats,
    print_emergency_board,
    print_latest_vitals,
    print_vitals_trend,
)


if TYPE_CHECKING:
    from clinicalapi.core.models import (
        AdmissionSummary,
        AvailableBed,
        Bill,
        BillLine,
        EmergencyBoardEntry,
        VitalSigns,
        VitalsTrendPoint,
    )


class ClinicalConsole:
    """Rich console interface for command results."""

    def __init__(self, verbose: bool = False) -> None:
        self.console = Console()
        self.verbose = verbose

    def setup_logging(self, level: str = "INFO") -> None:
        logging.basicConfig(
            level=level if self.verbose else "WARNING",
            format="%(message)s",
            handlers=[
                RichHandler(
                    console=self.console, rich_tracebacks=True, show_time=False, show_path=False
                )
            ],
            force=True,
        )

    def print_created(self, entity: str, identifier: int | str) -> None:
        self.console.print(f"[green]✓[/green] {entity} [bold]{identifier}[/bold]")

    def print_value(self, label: str, value: object) -> None:
        self.console.print(f"[bold]{label}:[/bold] {value}")

    def print_success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, error: str) -> None:
        self.console.print()
        self.console.print(
            Panel(f"[red]{error}[/red]", title="[red]Error[/red]", border_style="red")
        )

    def print_available_beds(self, beds: list[AvailableBed]) -> None:
        print_available_beds(self.console, beds)

    def print_admissions(self, admissions: list[AdmissionSummary]) -> None:
        print_admissions(self.console, admissions)

    def print_latest_vitals(self, vitals: VitalSigns, assessment: str) -> None:
        print_latest_vitals(self.console, vitals, assessment)

    def print_vitals_trend(self, points: list[VitalsTrendPoint]) -> None:
        print_vitals_trend(self.console, points)

    def print_bill(self, bill: Bill, lines: list[BillLine]) -> None:
        print_bill(self.console, bill, lines)

    def print_emergency_board(self, entries: list[EmergencyBoardEntry]) -> None:
        print_emergency_board(self.console, entries)

    def print_db_stats(self, stats: dict[str, int]) -> None:
        print_db_stats(self.console, stats)

"""Console output for the command-line interface."""

from clinicalapi.console.logger import ClinicalConsole

__all__ = ["ClinicalConsole"]

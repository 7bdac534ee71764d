"""Helpers for repeating and comparing batch runs."""

from clinicflow.analysis.replications import KPI_COLUMNS, compare_clinics, run_replications

__all__ = ["KPI_COLUMNS", "compare_clinics", "run_replications"]

"""
Report: Abschnitte aufbauen und als Job-Summary schreiben.
"""

from run_history.report.assembler import (
    assemble_report,
    build_report_sections,
    percentile_rows,
    status_breakdown,
    success_rate,
    SuccessRate,
)
from run_history.report.summary import Heading, JobSummary, Table, TableCell, make_table

__all__ = [
    "assemble_report",
    "build_report_sections",
    "percentile_rows",
    "status_breakdown",
    "success_rate",
    "SuccessRate",
    "Heading",
    "JobSummary",
    "Table",
    "TableCell",
    "make_table",
]

"""
Run-History-Report für GitHub-Actions-Workflows.

Lädt die bisherigen Runs des Workflows, zu dem der laufende Run gehört,
und schreibt Laufzeit-Perzentile und Erfolgsquote als Job-Summary.
"""

from run_history.history import summarize_history

__all__ = [
    "summarize_history",
]

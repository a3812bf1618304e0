"""
Fehlerklassen für den Run-History-Report.

Fatal sind nur ConfigurationError und WorkflowResolutionError: ohne
Workflow-ID kann kein Report entstehen. Alle anderen Fehler werden dort
behandelt, wo sie auftreten (Teil-Daten, Fallback-Label, ausgelassene
Abschnitte).
"""

from typing import Optional


class RunHistoryError(Exception):
    """Basisklasse aller Fehler dieses Pakets."""


class ConfigurationError(RunHistoryError):
    """Pflichtkonfiguration fehlt oder ist ungültig."""


class WorkflowResolutionError(RunHistoryError):
    """Die Workflow-ID des laufenden Runs konnte nicht ermittelt werden."""

    def __init__(self, run_id: int, attempts: int, last_error: Optional[BaseException] = None):
        self.run_id = run_id
        self.attempts = attempts
        self.last_error = last_error
        message = f"Workflow für Run {run_id} nach {attempts} Versuchen nicht auflösbar"
        if last_error is not None:
            message += f": {type(last_error).__name__}: {last_error}"
        super().__init__(message)


class EmptyGroupError(RunHistoryError, ValueError):
    """Perzentil-Abfrage auf einer Gruppe ohne Runs."""

    def __init__(self, status: Optional[str] = None):
        self.status = status
        label = f"'{status}'" if status else "ohne Status"
        super().__init__(f"Gruppe {label} enthält keine Runs")


class SummaryPathError(RunHistoryError):
    """Kein Ziel für die Job-Summary konfiguriert."""

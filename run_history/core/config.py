"""
Configuration Module.

Dieses Modul lädt und verwaltet alle Konfigurationsparameter aus
Environment-Variablen und .env-Dateien.

Die Konfiguration unterstützt:
- Environment-Variablen aus dem System (in GitHub Actions automatisch gesetzt)
- .env-Dateien im Projekt-Root (via python-dotenv)
- Sinnvolle Standardwerte für alle optionalen Parameter

Alle Parameter werden beim Modul-Import geladen und sind dann über
die globale `config`-Instanz verfügbar.
"""

import os
from typing import Any, Callable, Dict, Optional
from dotenv import load_dotenv

from run_history.core.errors import ConfigurationError


# Lade .env-Datei falls vorhanden
load_dotenv()


def _env_number(
    name: str,
    cast: Callable[[str], Any],
    default: Any,
    invalid: Dict[str, str],
) -> Any:
    """
    Liest eine Zahl aus einer Environment-Variable.

    Leere oder fehlende Werte ergeben den Standardwert. Nicht lesbare Werte
    werden in `invalid` vermerkt (Meldung über Config.validate()) und
    ebenfalls durch den Standardwert ersetzt, damit der Import nicht scheitert.

    Args:
        name: Name der Environment-Variable
        cast: int oder float
        default: Standardwert
        invalid: Sammlung ungültiger Werte (Name -> Rohwert)

    Returns:
        Gelesene Zahl oder default
    """
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return cast(value.strip())
    except ValueError:
        invalid[name] = value
        return default


class Config:
    """
    Konfigurationsklasse für den Workflow-Run-History-Report.

    Alle konfigurierbaren Parameter werden aus Environment-Variablen geladen,
    mit sinnvollen Standardwerten als Fallback. Die GITHUB_*-Variablen setzt
    der GitHub-Actions-Runner selbst, der Report braucht deshalb im Normalfall
    keine eigene Konfiguration.

    Attributes:
        GITHUB_API_URL: Basis-URL der GitHub REST API
        GITHUB_TOKEN: Token für die API (Bearer)
        GITHUB_REPOSITORY: Repository im Format owner/repo
        GITHUB_RUN_ID: ID des aktuell laufenden Workflow-Runs
        GITHUB_STEP_SUMMARY: Pfad der Job-Summary-Datei
        RUN_HISTORY_CREATED: Optionaler created-Filter (YYYY-MM-DD..YYYY-MM-DD)
        RUN_HISTORY_WORKFLOW_ID: Feste Workflow-ID (überspringt die Auflösung)
        RESOLVE_MAX_ATTEMPTS: Maximale Versuche für die Workflow-Auflösung
        RESOLVE_DELAY: Feste Wartezeit zwischen zwei Versuchen in Sekunden
        RESOLVE_MAX_ELAPSED: Optionale Gesamtzeit-Obergrenze in Sekunden
        PER_PAGE: Runs pro Seite beim Paginieren
        MAX_PAGES: Optionale Obergrenze für geladene Seiten
        HTTP_TIMEOUT: Timeout pro HTTP-Request in Sekunden
        LOG_LEVEL: Log-Level
        LOG_JSON: JSON-Logs aktivieren
    """

    INVALID_VALUES: Dict[str, str] = {}
    """Nicht lesbare Zahlenwerte aus dem Environment (Name -> Rohwert)."""

    # GitHub-Konfiguration
    GITHUB_API_URL: str = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")
    """Basis-URL der GitHub REST API (GitHub Enterprise: https://host/api/v3)."""

    GITHUB_TOKEN: Optional[str] = os.getenv("GITHUB_TOKEN")
    """
    Token für die GitHub API.

    In Workflows typischerweise `${{ github.token }}` mit `actions: read`.
    """

    GITHUB_REPOSITORY: Optional[str] = os.getenv("GITHUB_REPOSITORY")
    """Repository im Format owner/repo."""

    GITHUB_RUN_ID: Optional[int] = _env_number("GITHUB_RUN_ID", int, None, INVALID_VALUES)
    """ID des aktuell laufenden Runs; daraus wird die Workflow-ID ermittelt."""

    GITHUB_STEP_SUMMARY: Optional[str] = os.getenv("GITHUB_STEP_SUMMARY")
    """Datei, in die der Report als Job-Summary geschrieben wird."""

    # Report-Konfiguration
    RUN_HISTORY_CREATED: Optional[str] = os.getenv("RUN_HISTORY_CREATED") or None
    """
    Zeitraum-Filter für die Runs.

    Format: "YYYY-MM-DD..YYYY-MM-DD" (inklusive). Nicht gesetzt = gesamte Historie.
    """

    RUN_HISTORY_WORKFLOW_ID: Optional[int] = _env_number("RUN_HISTORY_WORKFLOW_ID", int, None, INVALID_VALUES)
    """Wenn gesetzt, wird die Workflow-ID nicht über den laufenden Run aufgelöst."""

    # Retry-Konfiguration für die Workflow-Auflösung
    RESOLVE_MAX_ATTEMPTS: int = _env_number("RUN_HISTORY_RESOLVE_MAX_ATTEMPTS", int, 10, INVALID_VALUES)
    """Maximale Anzahl Versuche, danach schlägt die Auflösung fehl."""

    RESOLVE_DELAY: float = _env_number("RUN_HISTORY_RESOLVE_DELAY", float, 1.0, INVALID_VALUES)
    """Feste Wartezeit zwischen zwei Versuchen in Sekunden."""

    RESOLVE_MAX_ELAPSED: Optional[float] = _env_number("RUN_HISTORY_RESOLVE_MAX_ELAPSED", float, None, INVALID_VALUES)
    """Optionale Obergrenze der Gesamtzeit aller Versuche in Sekunden."""

    # Pagination
    PER_PAGE: int = _env_number("RUN_HISTORY_PER_PAGE", int, 100, INVALID_VALUES)
    """Runs pro Seite (GitHub erlaubt maximal 100)."""

    MAX_PAGES: Optional[int] = _env_number("RUN_HISTORY_MAX_PAGES", int, None, INVALID_VALUES)
    """Obergrenze der geladenen Seiten (None = alle Seiten)."""

    HTTP_TIMEOUT: float = _env_number("HTTP_TIMEOUT", float, 30.0, INVALID_VALUES)
    """Timeout pro HTTP-Request in Sekunden."""

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_JSON: bool = os.getenv("LOG_JSON", "false").lower() == "true"

    def validate(self) -> None:
        """
        Prüft, ob alle Zahlenwerte aus dem Environment lesbar waren.

        Wird beim Start der Kommandozeile aufgerufen.

        Raises:
            ConfigurationError: Mit allen ungültigen Variablen und ihren Rohwerten
        """
        if self.INVALID_VALUES:
            details = ", ".join(
                f"{name}={value!r}" for name, value in sorted(self.INVALID_VALUES.items())
            )
            raise ConfigurationError(f"Ungültige Zahlenwerte in der Konfiguration: {details}")


# Globale Config-Instanz
config = Config()

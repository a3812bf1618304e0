"""
Run-Normalisierung.

Wandelt die Run-Einträge der API in WorkflowRun-Objekte um und filtert
alle Runs heraus, die noch nicht abgeschlossen sind.
"""

import logging
from datetime import datetime, timedelta
from typing import AsyncIterable, List, Optional

from run_history.schemas.runs import RawWorkflowRun, WorkflowRun

logger = logging.getLogger(__name__)

# Status-Werte, die trotz gesetzter conclusion nicht als "fertig" zählen
NON_TERMINAL_STATUSES = frozenset({"in_progress", "queued", "requested", "waiting", "pending"})


def parse_timestamp(value: str) -> datetime:
    """Parst einen ISO-8601-Zeitstempel der API (inkl. "Z"-Suffix)."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def duration_seconds(created_at: str, updated_at: str) -> int:
    """
    Dauer zwischen created_at und updated_at in ganzen Sekunden.

    Auf Millisekunden genau berechnet und abgerundet; negative Werte
    (Uhrzeit-Abweichungen der API) werden auf 0 gesetzt.
    """
    delta = parse_timestamp(updated_at) - parse_timestamp(created_at)
    milliseconds = delta // timedelta(milliseconds=1)
    return max(0, milliseconds // 1000)


def normalize_run(raw: RawWorkflowRun) -> Optional[WorkflowRun]:
    """
    Normalisiert einen Run-Eintrag.

    Args:
        raw: Run-Eintrag der API

    Returns:
        WorkflowRun oder None, wenn der Run verworfen wird
    """
    if not raw.has_conclusion:
        return None
    if raw.status in NON_TERMINAL_STATUSES:
        return None

    status = raw.conclusion if raw.conclusion is not None else raw.status
    if status is None:
        return None

    return WorkflowRun(
        id=raw.id,
        status=status,
        created_at=raw.created_at,
        updated_at=raw.updated_at,
        duration_seconds=duration_seconds(raw.created_at, raw.updated_at),
    )


async def collect_runs(pages: AsyncIterable[List[RawWorkflowRun]]) -> List[WorkflowRun]:
    """
    Sammelt alle abgeschlossenen Runs aus einer paginierten Quelle.

    Fehler beim Laden einer Seite (Netzwerk, Auth, HTTP-Status) beenden nur
    das Paginieren; bereits gesammelte Runs werden zurückgegeben. Ein
    einzelner Run mit unlesbarem Zeitstempel wird übersprungen.

    Args:
        pages: Async-Iterable von Seiten mit Run-Einträgen

    Returns:
        Liste der normalisierten Runs in Abrufreihenfolge
    """
    runs: List[WorkflowRun] = []
    try:
        async for page in pages:
            for raw in page:
                try:
                    run = normalize_run(raw)
                except ValueError as e:
                    logger.warning(f"Run {raw.id} übersprungen, Zeitstempel nicht lesbar: {e}")
                    continue
                if run is not None:
                    runs.append(run)
    except Exception as e:
        logger.error(f"Fehler beim Laden der Workflow-Runs: {e}")
    return runs

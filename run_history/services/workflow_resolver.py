"""
Workflow-Auflösung.

Ermittelt die Workflow-ID des laufenden Runs. Direkt nach dem Start eines
Runs liefert die API den Run gelegentlich noch nicht aus; deshalb wird mit
fester Wartezeit wiederholt, aber nur begrenzt oft.
"""

import logging
from typing import Optional

from tenacity import RetryError

from run_history.core.errors import WorkflowResolutionError
from run_history.github.client import GitHubClient
from run_history.resilience.resilience import RETRY_EXCEPTIONS, bounded_retrying

logger = logging.getLogger(__name__)

# Unvollständige Antworten werden wie transiente Fehler behandelt
RESOLVE_RETRY_EXCEPTIONS = RETRY_EXCEPTIONS + (KeyError, TypeError, ValueError)


async def _lookup_workflow_id(client: GitHubClient, run_id: int) -> int:
    run = await client.get_workflow_run(run_id)
    return int(run["workflow_id"])


async def resolve_workflow_id(
    client: GitHubClient,
    run_id: int,
    max_attempts: int = 10,
    delay_seconds: float = 1.0,
    max_elapsed_seconds: Optional[float] = None,
) -> int:
    """
    Liefert die Workflow-ID zum Run.

    Args:
        client: GitHub API Client
        run_id: ID des laufenden Runs
        max_attempts: Maximale Anzahl Versuche
        delay_seconds: Feste Wartezeit zwischen den Versuchen
        max_elapsed_seconds: Optionale Obergrenze der Gesamtzeit

    Returns:
        Workflow-ID

    Raises:
        WorkflowResolutionError: Wenn alle Versuche fehlgeschlagen sind
    """
    retrying = bounded_retrying(
        max_attempts,
        delay=delay_seconds,
        max_elapsed=max_elapsed_seconds,
        retry_on=RESOLVE_RETRY_EXCEPTIONS,
    )
    try:
        workflow_id = await retrying(_lookup_workflow_id, client, run_id)
    except RetryError as e:
        last_attempt = e.last_attempt
        last_error = last_attempt.exception()
        logger.error(
            "Workflow für Run %s nach %d Versuchen nicht auflösbar: %s",
            run_id, last_attempt.attempt_number, last_error,
        )
        raise WorkflowResolutionError(run_id, last_attempt.attempt_number, last_error) from last_error

    logger.info("Run %s gehört zu Workflow %s", run_id, workflow_id)
    return workflow_id

"""
Run-History-Report.

Ablauf: Workflow-ID auflösen -> Anzeigename laden -> Runs paginiert laden
und normalisieren -> nach Status gruppieren -> Report an den Sink geben.
"""

import logging
from typing import List, Optional

from run_history.core.config import config
from run_history.github.client import GitHubClient
from run_history.report.assembler import ReportSink, assemble_report
from run_history.report.summary import JobSummary, Section
from run_history.services.normalizer import collect_runs
from run_history.services.run_groups import group_runs
from run_history.services.workflow_definition import fetch_workflow_name
from run_history.services.workflow_resolver import resolve_workflow_id

logger = logging.getLogger(__name__)


async def summarize_history(
    client: GitHubClient,
    run_id: Optional[int] = None,
    workflow_id: Optional[int] = None,
    created: Optional[str] = None,
    sink: Optional[ReportSink] = None,
    max_attempts: Optional[int] = None,
    retry_delay: Optional[float] = None,
    max_elapsed: Optional[float] = None,
    per_page: Optional[int] = None,
    max_pages: Optional[int] = None,
) -> List[Section]:
    """
    Erstellt den Report für den Workflow des laufenden Runs.

    Args:
        client: GitHub API Client
        run_id: ID des laufenden Runs (für die Workflow-Auflösung)
        workflow_id: Feste Workflow-ID; überspringt die Auflösung
        created: Optionaler Zeitraum "YYYY-MM-DD..YYYY-MM-DD"
        sink: Ziel des Reports (Standard: JobSummary)
        max_attempts, retry_delay, max_elapsed: Retry-Grenzen der Auflösung
        per_page, max_pages: Pagination

    Returns:
        Die geschriebenen Abschnitte

    Raises:
        ValueError: Wenn weder run_id noch workflow_id angegeben ist
        WorkflowResolutionError: Wenn die Workflow-ID nicht ermittelt werden kann
    """
    if workflow_id is None:
        if run_id is None:
            raise ValueError("run_id oder workflow_id muss angegeben werden")
        workflow_id = await resolve_workflow_id(
            client,
            run_id,
            max_attempts=max_attempts if max_attempts is not None else config.RESOLVE_MAX_ATTEMPTS,
            delay_seconds=retry_delay if retry_delay is not None else config.RESOLVE_DELAY,
            max_elapsed_seconds=max_elapsed if max_elapsed is not None else config.RESOLVE_MAX_ELAPSED,
        )

    name = await fetch_workflow_name(client, workflow_id)
    label = name or f"Workflow {workflow_id}"

    runs = await collect_runs(
        client.iter_workflow_run_pages(
            workflow_id,
            created=created,
            per_page=per_page,
            max_pages=max_pages if max_pages is not None else config.MAX_PAGES,
        )
    )
    grouped = group_runs(runs)
    logger.info(
        "%d abgeschlossene Runs für %s geladen, Status: %s",
        len(runs), label, ", ".join(grouped.keys()) or "-",
    )

    return await assemble_report(grouped, sink if sink is not None else JobSummary(), label)

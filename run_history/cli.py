"""
Kommandozeile für den Run-History-Report.

Alle Optionen fallen auf die Konfiguration (Environment) zurück; in einem
GitHub-Actions-Job reicht deshalb ein Aufruf ohne Argumente:

    python -m run_history
"""

import argparse
import asyncio
import logging
from typing import List, Optional

from run_history.core.config import config
from run_history.core.errors import ConfigurationError, RunHistoryError
from run_history.core.logging_config import setup_logging
from run_history.github.client import GitHubClient
from run_history.history import summarize_history
from run_history.report.summary import JobSummary

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run-history",
        description="Schreibt eine Job-Summary mit Laufzeit-Statistiken der bisherigen Workflow-Runs.",
    )
    parser.add_argument("--repository", default=config.GITHUB_REPOSITORY, help="owner/repo")
    parser.add_argument("--run-id", type=int, default=config.GITHUB_RUN_ID, help="ID des laufenden Runs")
    parser.add_argument(
        "--workflow-id",
        type=int,
        default=config.RUN_HISTORY_WORKFLOW_ID,
        help="Feste Workflow-ID (überspringt die Auflösung über den Run)",
    )
    parser.add_argument(
        "--created",
        default=config.RUN_HISTORY_CREATED,
        help='Zeitraum der Runs, z. B. "2024-01-01..2024-01-31"',
    )
    parser.add_argument("--summary-path", default=config.GITHUB_STEP_SUMMARY, help="Ziel der Job-Summary")
    parser.add_argument("--max-attempts", type=int, default=config.RESOLVE_MAX_ATTEMPTS)
    parser.add_argument("--retry-delay", type=float, default=config.RESOLVE_DELAY)
    parser.add_argument("--max-pages", type=int, default=config.MAX_PAGES)
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    parser.add_argument("--log-json", action="store_true", default=config.LOG_JSON)
    return parser


async def run(args: argparse.Namespace) -> None:
    config.validate()
    if not args.repository or "/" not in args.repository.strip("/"):
        raise ConfigurationError(
            f"Repository muss im Format owner/repo angegeben werden (--repository oder "
            f"GITHUB_REPOSITORY, aktuell: {args.repository!r})"
        )
    if args.run_id is None and args.workflow_id is None:
        raise ConfigurationError("Run-ID fehlt (--run-id oder GITHUB_RUN_ID)")
    if args.max_attempts < 1:
        raise ConfigurationError("--max-attempts muss >= 1 sein")
    if not config.GITHUB_TOKEN:
        logger.warning("GITHUB_TOKEN ist nicht gesetzt, API-Aufrufe erfolgen ohne Authentifizierung")

    async with GitHubClient(args.repository, token=config.GITHUB_TOKEN) as client:
        await summarize_history(
            client,
            run_id=args.run_id,
            workflow_id=args.workflow_id,
            created=args.created,
            sink=JobSummary(args.summary_path),
            max_attempts=args.max_attempts,
            retry_delay=args.retry_delay,
            max_pages=args.max_pages,
        )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_json)
    try:
        asyncio.run(run(args))
    except RunHistoryError as e:
        logger.error(str(e))
        return 1
    return 0

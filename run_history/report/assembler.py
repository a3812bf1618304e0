"""
Report-Aufbau aus gruppierten Runs.

Reihenfolge der Abschnitte:
1. Gesamtzahl der Runs
2. Erfolgsquote (nur wenn success- und failure-Gruppe existieren)
3. Perzentil-Tabellen für success und failure (nur nicht-leere Gruppen)
4. Aufteilung nach Status (nur wenn es Runs gibt)

Die Erfolgsquote wird kaufmännisch gerundet, die Status-Anteile werden
aufgerundet.
"""

import logging
import math
from typing import List, Optional, Protocol, Tuple

from pydantic import BaseModel

from run_history.report.summary import Heading, Section, TableCell, make_table
from run_history.services.run_groups import GroupedRuns, WorkflowGroup, total_runs

logger = logging.getLogger(__name__)

SUCCESS = "success"
FAILURE = "failure"
PERCENTILES = (99, 90, 50)


class ReportSink(Protocol):
    def add_section(self, section: Section) -> object: ...

    async def write(self) -> object: ...


class SuccessRate(BaseModel):
    successes: int
    total: int
    percent: int


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def success_rate(grouped: GroupedRuns) -> Optional[SuccessRate]:
    """Erfolgsquote aus success- und failure-Gruppe, None wenn nicht berechenbar."""
    success = grouped.get(SUCCESS)
    failure = grouped.get(FAILURE)
    if success is None or failure is None:
        return None
    total = success.size + failure.size
    if total == 0:
        return None
    return SuccessRate(
        successes=success.size,
        total=total,
        percent=round_half_up(success.size * 100 / total),
    )


def percentile_rows(group: WorkflowGroup) -> List[Tuple[str, int]]:
    """(Label, Dauer) für 99., 90. und 50. Perzentil; leer für leere Gruppen."""
    if group.size == 0:
        return []
    return [(f"{p}th", group.duration_at_percentile(p)) for p in PERCENTILES]


def status_breakdown(grouped: GroupedRuns) -> List[Tuple[str, int]]:
    """(Status, Prozent vom Gesamt, aufgerundet) in Reihenfolge der Gruppen."""
    total = total_runs(grouped)
    if total == 0:
        return []
    return [(status, math.ceil(group.size * 100 / total)) for status, group in grouped.items()]


def _percentile_table(rows: List[Tuple[str, int]], label: str) -> Section:
    return make_table(
        [
            [TableCell(data="Percentile", header=True), TableCell(data=f"{label} duration in seconds", header=True)],
            *[[name, str(duration)] for name, duration in rows],
        ]
    )


def build_report_sections(grouped: GroupedRuns, workflow_label: str) -> List[Section]:
    """
    Baut die Abschnitte des Reports.

    Args:
        grouped: Runs gruppiert nach Status
        workflow_label: Anzeigename des Workflows

    Returns:
        Abschnitte in Ausgabereihenfolge
    """
    total = total_runs(grouped)
    sections: List[Section] = [Heading(text=f"{workflow_label} run history ({total} total runs)")]

    rate = success_rate(grouped)
    if rate is not None:
        sections.append(
            Heading(
                text=f"Success rate: {rate.percent}% "
                f"({rate.successes} successes out of {rate.total} runs)"
            )
        )

    for status, heading, label in (
        (SUCCESS, "successful runs", "Success"),
        (FAILURE, "failing runs", "Failure"),
    ):
        group = grouped.get(status)
        if group is None:
            continue
        rows = percentile_rows(group)
        if not rows:
            continue
        sections.append(Heading(text=f"{group.size} {heading}"))
        sections.append(_percentile_table(rows, label))

    breakdown = status_breakdown(grouped)
    if breakdown:
        sections.append(Heading(text="Run status breakdown"))
        sections.append(
            make_table(
                [
                    [TableCell(data="Status", header=True), TableCell(data="Percent of total", header=True)],
                    *[[status, f"{percent}% of total"] for status, percent in breakdown],
                ]
            )
        )
    return sections


async def assemble_report(grouped: GroupedRuns, sink: ReportSink, workflow_label: str) -> List[Section]:
    """
    Übergibt alle Abschnitte an den Sink und schreibt ihn einmal.

    Returns:
        Die übergebenen Abschnitte
    """
    sections = build_report_sections(grouped, workflow_label)
    for section in sections:
        sink.add_section(section)
    await sink.write()
    logger.info("Report mit %d Abschnitten erstellt", len(sections))
    return sections

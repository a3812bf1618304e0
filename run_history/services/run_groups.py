"""
Gruppierung der Runs nach Status und Perzentil-Statistiken pro Gruppe.

Perzentile werden immer über aufsteigend sortierte Dauern berechnet:
ein niedriges Perzentil entspricht einer kurzen Dauer.
"""

import bisect
import math
from typing import Dict, Iterable, List, Optional

from run_history.core.errors import EmptyGroupError
from run_history.schemas.runs import WorkflowRun


class WorkflowGroup:
    """
    Alle Runs mit demselben Status.

    Die Runs werden in Ankunftsreihenfolge gespeichert; Abfragen sortieren
    eine Kopie der Dauern und verändern die Gruppe nicht.
    """

    def __init__(self, status: str, runs: Optional[List[WorkflowRun]] = None):
        self.status = status
        self.runs: List[WorkflowRun] = list(runs) if runs else []

    def __len__(self) -> int:
        return len(self.runs)

    def __repr__(self) -> str:
        return f"WorkflowGroup(status={self.status!r}, size={len(self.runs)})"

    @property
    def size(self) -> int:
        return len(self.runs)

    def add(self, run: WorkflowRun) -> None:
        self.runs.append(run)

    def sorted_durations(self) -> List[int]:
        """Dauern aller Runs in Sekunden, aufsteigend sortiert (neue Liste)."""
        return sorted(run.duration_seconds for run in self.runs)

    def duration_at_percentile(self, percentile: float) -> int:
        """
        Dauer beim angegebenen Perzentil.

        Index = floor(p / 100 * n), begrenzt auf [0, n - 1]; p = 100 liefert
        damit die längste Dauer.

        Args:
            percentile: Perzentil im Bereich [0, 100]

        Returns:
            Dauer in Sekunden

        Raises:
            ValueError: Wenn percentile außerhalb von [0, 100] liegt
            EmptyGroupError: Wenn die Gruppe keine Runs enthält
        """
        if not 0 <= percentile <= 100:
            raise ValueError(f"Perzentil muss zwischen 0 und 100 liegen, nicht {percentile}")
        durations = self.sorted_durations()
        if not durations:
            raise EmptyGroupError(self.status)
        index = math.floor(percentile * len(durations) / 100)
        index = min(max(index, 0), len(durations) - 1)
        return durations[index]

    def percentile_at_duration(self, duration: float) -> int:
        """
        Perzentil der Runs, die kürzer als die angegebene Dauer sind.

        Ergebnis = ceil(k / n * 100), wobei k die Anzahl Dauern < duration ist.
        Ist keine Dauer >= duration, ergibt sich 100.

        Raises:
            EmptyGroupError: Wenn die Gruppe keine Runs enthält
        """
        durations = self.sorted_durations()
        if not durations:
            raise EmptyGroupError(self.status)
        index = bisect.bisect_left(durations, duration)
        return math.ceil(index * 100 / len(durations))


GroupedRuns = Dict[str, WorkflowGroup]


def group_runs(runs: Iterable[WorkflowRun]) -> GroupedRuns:
    """
    Verteilt Runs auf Gruppen nach Status.

    Gruppen entstehen beim ersten Run ihres Status; die Reihenfolge des
    Dictionaries entspricht dieser Reihenfolge. Leere Gruppen gibt es nicht.
    """
    grouped: GroupedRuns = {}
    for run in runs:
        group = grouped.get(run.status)
        if group is None:
            group = WorkflowGroup(run.status)
            grouped[run.status] = group
        group.add(run)
    return grouped


def total_runs(grouped: GroupedRuns) -> int:
    """Anzahl aller Runs über alle Gruppen."""
    return sum(group.size for group in grouped.values())

"""
Unit-Tests für die Run-Normalisierung (run_history.services.normalizer).

Testet:
- Filter für nicht abgeschlossene Runs
- conclusion überschreibt status
- Dauerberechnung
- Teil-Daten bei Fehlern während der Pagination
- Runs mit unlesbarem Zeitstempel werden übersprungen
"""

import pytest

from run_history.schemas.runs import RawWorkflowRun
from run_history.services.normalizer import (
    NON_TERMINAL_STATUSES,
    collect_runs,
    duration_seconds,
    normalize_run,
)

from conftest import raw_run


def _raw(**kwargs) -> RawWorkflowRun:
    return RawWorkflowRun.model_validate(raw_run(1, **kwargs))


def test_normalize_run_uses_conclusion_as_status():
    """Die conclusion ersetzt den Roh-Status."""
    run = normalize_run(_raw(conclusion="failure"))
    assert run is not None
    assert run.status == "failure"
    assert run.id == 1
    assert run.duration_seconds == 60


def test_normalize_run_discards_missing_conclusion():
    """Runs ohne conclusion-Feld werden verworfen."""
    raw = RawWorkflowRun.model_validate(
        {"id": 5, "status": "completed", "created_at": "2024-01-01T00:00:00Z", "updated_at": "2024-01-01T00:00:01Z"}
    )
    assert not raw.has_conclusion
    assert normalize_run(raw) is None


@pytest.mark.parametrize("status", sorted(NON_TERMINAL_STATUSES))
def test_normalize_run_discards_non_terminal_status(status):
    """Nicht abgeschlossene Status werden verworfen, auch mit conclusion."""
    assert normalize_run(_raw(status=status, conclusion="success")) is None


def test_normalize_run_null_conclusion_keeps_raw_status():
    """conclusion = null: der Roh-Status bleibt erhalten."""
    run = normalize_run(_raw(status="completed", conclusion=None))
    assert run is not None
    assert run.status == "completed"


def test_normalize_run_keeps_unknown_terminal_status():
    """Neue Abschluss-Status werden ohne Sonderbehandlung übernommen."""
    run = normalize_run(_raw(conclusion="startup_failure"))
    assert run.status == "startup_failure"


def test_duration_seconds_floors_milliseconds():
    """Millisekunden werden abgerundet."""
    assert duration_seconds("2024-01-01T00:00:00.000Z", "2024-01-01T00:00:01.999Z") == 1
    assert duration_seconds("2024-01-01T00:00:00Z", "2024-01-01T01:00:00Z") == 3600


def test_duration_seconds_never_negative():
    """updated_at vor created_at ergibt 0."""
    assert duration_seconds("2024-01-01T00:00:10Z", "2024-01-01T00:00:00Z") == 0


def test_duration_seconds_with_offsets():
    """Zeitzonen-Offsets werden berücksichtigt."""
    assert duration_seconds("2024-01-01T10:00:00+02:00", "2024-01-01T08:00:30Z") == 30


async def _pages(pages, fail_after=None):
    for index, page in enumerate(pages):
        if fail_after is not None and index == fail_after:
            raise ConnectionError("network down")
        yield [RawWorkflowRun.model_validate(entry) for entry in page]


@pytest.mark.asyncio
async def test_collect_runs_filters_and_keeps_order():
    """Alle Seiten werden gelesen, nicht abgeschlossene Runs fehlen."""
    pages = [
        [raw_run(1), raw_run(2, status="in_progress", conclusion=None)],
        [raw_run(3, conclusion="failure"), raw_run(4, status="queued")],
    ]
    runs = await collect_runs(_pages(pages))
    assert [run.id for run in runs] == [1, 3]


@pytest.mark.asyncio
async def test_collect_runs_returns_partial_data_on_error(caplog):
    """Fehler beim Laden beendet die Pagination, bisherige Runs bleiben."""
    pages = [[raw_run(1), raw_run(2)], [raw_run(3)], [raw_run(4)]]
    runs = await collect_runs(_pages(pages, fail_after=1))
    assert [run.id for run in runs] == [1, 2]
    assert "Fehler beim Laden der Workflow-Runs" in caplog.text


def test_normalize_run_rejects_unparsable_timestamp():
    with pytest.raises(ValueError):
        normalize_run(_raw(updated_at="garbage"))


@pytest.mark.asyncio
async def test_collect_runs_skips_run_with_bad_timestamp(caplog):
    """Ein kaputter Run beendet die Pagination nicht."""
    pages = [
        [raw_run(1), raw_run(2, updated_at="garbage"), raw_run(3)],
        [raw_run(4)],
    ]
    runs = await collect_runs(_pages(pages))
    assert [run.id for run in runs] == [1, 3, 4]
    skipped = [r for r in caplog.records if "Run 2 übersprungen" in r.getMessage()]
    assert len(skipped) == 1
    assert skipped[0].levelname == "WARNING"
    assert "Fehler beim Laden der Workflow-Runs" not in caplog.text

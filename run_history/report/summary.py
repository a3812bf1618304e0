"""
Job-Summary für GitHub Actions.

Sammelt Überschriften und Tabellen und schreibt sie als HTML in die Datei
aus GITHUB_STEP_SUMMARY (so wie es auch @actions/core tut).
"""

import html
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

import aiofiles
from pydantic import BaseModel, Field

from run_history.core.config import config
from run_history.core.errors import SummaryPathError

logger = logging.getLogger(__name__)


class TableCell(BaseModel):
    """Eine Tabellenzelle; header=True wird als <th> ausgegeben."""
    data: str
    header: bool = False


class Heading(BaseModel):
    """Überschrift (Level 1-6)."""
    text: str
    level: int = Field(default=1, ge=1, le=6)


class Table(BaseModel):
    """Tabelle als Liste von Zeilen."""
    rows: List[List[TableCell]]


Section = Union[Heading, Table]
CellInput = Union[str, TableCell]


def make_table(rows: Sequence[Sequence[CellInput]]) -> Table:
    """Baut eine Table; Strings werden zu normalen Zellen."""
    return Table(
        rows=[
            [cell if isinstance(cell, TableCell) else TableCell(data=str(cell)) for cell in row]
            for row in rows
        ]
    )


def render_section(section: Section) -> str:
    """Rendert eine Section als HTML."""
    if isinstance(section, Heading):
        tag = f"h{section.level}"
        return f"<{tag}>{html.escape(section.text)}</{tag}>\n"

    rendered_rows = []
    for row in section.rows:
        cells = []
        for cell in row:
            tag = "th" if cell.header else "td"
            cells.append(f"<{tag}>{html.escape(cell.data)}</{tag}>")
        rendered_rows.append(f"<tr>{''.join(cells)}</tr>")
    return f"<table>{''.join(rendered_rows)}</table>\n"


class JobSummary:
    """
    Puffer für die Job-Summary.

    Sections werden in Aufrufreihenfolge gesammelt und erst mit write()
    in die Datei geschrieben.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self._path = path
        self._sections: List[Section] = []

    @property
    def sections(self) -> List[Section]:
        return list(self._sections)

    @property
    def path(self) -> Path:
        """
        Zieldatei der Summary.

        Raises:
            SummaryPathError: Wenn weder path noch GITHUB_STEP_SUMMARY gesetzt ist
        """
        path = self._path or config.GITHUB_STEP_SUMMARY
        if not path:
            raise SummaryPathError(
                "Kein Ziel für die Job-Summary: GITHUB_STEP_SUMMARY ist nicht gesetzt"
            )
        return Path(path)

    def add_section(self, section: Section) -> "JobSummary":
        self._sections.append(section)
        return self

    def add_heading(self, text: str, level: int = 1) -> "JobSummary":
        return self.add_section(Heading(text=text, level=level))

    def add_table(self, rows: Sequence[Sequence[CellInput]]) -> "JobSummary":
        return self.add_section(make_table(rows))

    def stringify(self) -> str:
        return "".join(render_section(section) for section in self._sections)

    def is_empty(self) -> bool:
        return not self._sections

    def clear(self) -> "JobSummary":
        self._sections = []
        return self

    async def write(self, overwrite: bool = False) -> "JobSummary":
        """
        Schreibt den Puffer in die Summary-Datei und leert ihn.

        Args:
            overwrite: True ersetzt den Dateiinhalt, sonst wird angehängt
        """
        path = self.path
        mode = "w" if overwrite else "a"
        async with aiofiles.open(path, mode, encoding="utf-8") as f:
            await f.write(self.stringify())
        logger.info("Job-Summary mit %d Abschnitten nach %s geschrieben", len(self._sections), path)
        return self.clear()

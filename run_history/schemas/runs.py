"""Schemas für Workflow-Runs (API-Einträge und normalisierte Runs)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RawWorkflowRun(BaseModel):
    """Ein Run-Eintrag, wie ihn die GitHub API liefert (nur genutzte Felder)."""
    model_config = ConfigDict(extra="ignore")

    id: int
    status: Optional[str] = None
    conclusion: Optional[str] = None
    created_at: str
    updated_at: str

    @property
    def has_conclusion(self) -> bool:
        """True wenn das Feld conclusion geliefert wurde (auch wenn es null ist)."""
        return "conclusion" in self.model_fields_set


class WorkflowRun(BaseModel):
    """Normalisierter, abgeschlossener Run."""
    model_config = ConfigDict(frozen=True)

    id: int
    status: str
    created_at: str
    updated_at: str
    duration_seconds: int = Field(ge=0)

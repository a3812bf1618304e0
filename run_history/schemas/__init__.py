"""
Pydantic-Schemas für Workflow-Runs.
"""

from run_history.schemas.runs import RawWorkflowRun, WorkflowRun

__all__ = [
    "RawWorkflowRun",
    "WorkflowRun",
]

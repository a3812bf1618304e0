"""
Services: Normalisierung, Gruppierung/Perzentile, Workflow-Auflösung und -Name.
"""

from run_history.services.normalizer import collect_runs, normalize_run, NON_TERMINAL_STATUSES
from run_history.services.run_groups import GroupedRuns, WorkflowGroup, group_runs, total_runs
from run_history.services.workflow_definition import fetch_workflow_name
from run_history.services.workflow_resolver import resolve_workflow_id

__all__ = [
    "collect_runs",
    "normalize_run",
    "NON_TERMINAL_STATUSES",
    "GroupedRuns",
    "WorkflowGroup",
    "group_runs",
    "total_runs",
    "fetch_workflow_name",
    "resolve_workflow_id",
]

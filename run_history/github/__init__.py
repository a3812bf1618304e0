"""
GitHub REST API Anbindung.

- GitHubClient: paginierte Workflow-Runs, Run-Lookup, Workflow-Definition
"""

from run_history.github.client import GitHubClient

__all__ = [
    "GitHubClient",
]

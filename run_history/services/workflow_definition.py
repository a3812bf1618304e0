"""
Anzeigename eines Workflows aus seiner YAML-Definition.

Fehler sind hier nie fatal: ohne Namen zeigt der Report die Workflow-ID.
"""

import base64
import logging
from typing import Any, Dict, Optional

import yaml

from run_history.github.client import GitHubClient

logger = logging.getLogger(__name__)


def decode_content(payload: Dict[str, Any]) -> str:
    """
    Dekodiert den Inhalt einer Contents-API-Antwort.

    Args:
        payload: Antwort mit "content" und optional "encoding"

    Returns:
        Dateiinhalt als Text
    """
    content = payload.get("content") or ""
    if payload.get("encoding") == "base64":
        return base64.b64decode(content).decode("utf-8")
    return content


def parse_workflow_name(text: str) -> Optional[str]:
    """Liest das Top-Level-Feld `name` aus einer Workflow-Datei."""
    document = yaml.safe_load(text)
    if not isinstance(document, dict):
        return None
    name = document.get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    return None


async def fetch_workflow_name(client: GitHubClient, workflow_id: int) -> Optional[str]:
    """
    Ermittelt den Anzeigenamen eines Workflows.

    Bevorzugt wird `name` aus der YAML-Datei; fehlt er, wird der Name aus
    den Workflow-Metadaten der API verwendet.

    Returns:
        Name oder None, wenn er nicht ermittelt werden konnte
    """
    try:
        workflow = await client.get_workflow(workflow_id)
    except Exception as e:
        logger.warning(f"Workflow {workflow_id} konnte nicht geladen werden: {e}")
        return None

    fallback = workflow.get("name") or None
    path = workflow.get("path")
    if not path:
        return fallback

    try:
        payload = await client.get_content(path)
        name = parse_workflow_name(decode_content(payload))
    except Exception as e:
        logger.warning(f"Workflow-Definition {path} konnte nicht gelesen werden: {e}")
        return fallback

    return name or fallback

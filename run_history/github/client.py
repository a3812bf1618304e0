"""
GitHub REST API Client.

Dünner async Wrapper um httpx für die Endpunkte, die der Report braucht:
- Workflow-Runs eines Workflows (paginiert über den Link-Header)
- Einzelner Run (für die Workflow-ID des laufenden Runs)
- Workflow-Definition und Dateiinhalt (für den Anzeigenamen)

Nicht-2xx-Antworten werfen httpx.HTTPStatusError.
"""

import logging
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

from run_history.core.config import config
from run_history.schemas.runs import RawWorkflowRun

logger = logging.getLogger(__name__)

GITHUB_API_VERSION = "2022-11-28"


class GitHubClient:
    """
    Async Client für die GitHub REST API eines Repositories.

    Als async Context Manager verwenden, damit die HTTP-Verbindungen
    sauber geschlossen werden:

        async with GitHubClient("owner/repo", token) as client:
            run = await client.get_workflow_run(123)
    """

    def __init__(
        self,
        repository: str,
        token: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.repository = repository
        self.api_url = (api_url or config.GITHUB_API_URL).rstrip("/")
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=self.api_url,
            headers=headers,
            timeout=timeout if timeout is not None else config.HTTP_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _repo_path(self, suffix: str) -> str:
        return f"/repos/{self.repository}/{suffix.lstrip('/')}"

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = await self._client.get(url, params=params)
        response.raise_for_status()
        return response.json()

    async def iter_workflow_run_pages(
        self,
        workflow_id: int,
        created: Optional[str] = None,
        per_page: Optional[int] = None,
        max_pages: Optional[int] = None,
    ) -> AsyncIterator[List[RawWorkflowRun]]:
        """
        Liefert die Runs eines Workflows Seite für Seite.

        Args:
            workflow_id: ID des Workflows
            created: Optionaler Zeitraum "YYYY-MM-DD..YYYY-MM-DD"
            per_page: Runs pro Seite (Standard aus config.PER_PAGE)
            max_pages: Optionale Obergrenze der Seiten

        Yields:
            Liste der Run-Einträge einer Seite
        """
        url: Optional[str] = self._repo_path(f"actions/workflows/{workflow_id}/runs")
        params: Optional[Dict[str, Any]] = {"per_page": per_page or config.PER_PAGE}
        if created:
            params["created"] = created

        page = 0
        while url is not None:
            if max_pages is not None and page >= max_pages:
                logger.info("Seitenlimit %d erreicht, weitere Runs werden nicht geladen", max_pages)
                return
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            page += 1
            data = response.json()
            runs = [RawWorkflowRun.model_validate(entry) for entry in data.get("workflow_runs", [])]
            logger.debug("Seite %d mit %d Runs geladen", page, len(runs))
            yield runs

            # Folge-URL enthält bereits alle Query-Parameter
            next_link = response.links.get("next")
            url = next_link["url"] if next_link else None
            params = None

    async def get_workflow_run(self, run_id: int) -> Dict[str, Any]:
        """Lädt einen einzelnen Workflow-Run."""
        return await self._get_json(self._repo_path(f"actions/runs/{run_id}"))

    async def get_workflow(self, workflow_id: int) -> Dict[str, Any]:
        """Lädt die Workflow-Metadaten (u. a. path und name)."""
        return await self._get_json(self._repo_path(f"actions/workflows/{workflow_id}"))

    async def get_content(self, path: str, ref: Optional[str] = None) -> Dict[str, Any]:
        """Lädt eine Datei über die Contents-API (Inhalt meist base64-kodiert)."""
        params = {"ref": ref} if ref else None
        return await self._get_json(self._repo_path(f"contents/{path.lstrip('/')}"), params=params)

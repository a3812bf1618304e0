"""
Pytest Configuration und Fixtures.

Dieses Modul definiert gemeinsame Fixtures für alle Tests:
- Fake GitHub API (httpx.MockTransport)
- GitHub-Client gegen die Fake API
- Temporäre Job-Summary-Datei
"""

import base64
from typing import Any, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio

from run_history.core.config import config
from run_history.github.client import GitHubClient

API_URL = "https://api.github.test"
REPOSITORY = "octo/demo"


def raw_run(
    run_id: int,
    conclusion: Optional[str] = "success",
    status: str = "completed",
    created_at: str = "2024-01-01T10:00:00Z",
    updated_at: str = "2024-01-01T10:01:00Z",
) -> Dict[str, Any]:
    """Run-Eintrag im Format der GitHub API."""
    return {
        "id": run_id,
        "status": status,
        "conclusion": conclusion,
        "created_at": created_at,
        "updated_at": updated_at,
    }


def run_with_duration(run_id: int, seconds: int, conclusion: str = "success") -> Dict[str, Any]:
    minutes, secs = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return raw_run(
        run_id,
        conclusion=conclusion,
        created_at="2024-01-01T00:00:00Z",
        updated_at=f"2024-01-01T{hours:02d}:{minutes:02d}:{secs:02d}Z",
    )


class FakeGitHubApi:
    """
    Minimale Fake-Implementierung der benötigten GitHub-Endpunkte.

    Attributes:
        pages: Seiten der Workflow-Runs (Liste von Run-Listen)
        fail_page: Index der Seite, die mit HTTP 502 antwortet (None = keine)
        run_lookup_failures: Anzahl der Run-Lookups, die mit HTTP 500 scheitern
        workflow: Antwort für GET /actions/workflows/{id} (None = 404)
        contents: Antworten der Contents-API nach Pfad
    """

    def __init__(self, workflow_id: int = 42):
        self.workflow_id = workflow_id
        self.pages: List[List[Dict[str, Any]]] = [[]]
        self.fail_page: Optional[int] = None
        self.run_lookup_failures = 0
        self.workflow: Optional[Dict[str, Any]] = None
        self.contents: Dict[str, Dict[str, Any]] = {}
        self.requests: List[httpx.Request] = []

    def set_workflow_file(self, path: str, text: str, name: Optional[str] = None) -> None:
        self.workflow = {"id": self.workflow_id, "path": path, "name": name or path}
        self.contents[path] = {
            "encoding": "base64",
            "content": base64.b64encode(text.encode("utf-8")).decode("ascii"),
        }

    def run_lookup_count(self) -> int:
        return sum(1 for r in self.requests if "/actions/runs/" in r.url.path)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        prefix = f"/repos/{REPOSITORY}"

        if path.startswith(f"{prefix}/actions/runs/"):
            if self.run_lookup_failures > 0:
                self.run_lookup_failures -= 1
                return httpx.Response(500, json={"message": "Server Error"})
            run_id = int(path.rsplit("/", 1)[-1])
            return httpx.Response(200, json={"id": run_id, "workflow_id": self.workflow_id})

        if path == f"{prefix}/actions/workflows/{self.workflow_id}/runs":
            page = int(request.url.params.get("page", "1"))
            if self.fail_page is not None and page - 1 == self.fail_page:
                return httpx.Response(502, json={"message": "Bad Gateway"})
            runs = self.pages[page - 1]
            headers = {}
            if page < len(self.pages):
                next_url = f"{API_URL}{path}?per_page=100&page={page + 1}"
                headers["Link"] = f'<{next_url}>; rel="next"'
            return httpx.Response(
                200,
                json={"total_count": sum(len(p) for p in self.pages), "workflow_runs": runs},
                headers=headers,
            )

        if path == f"{prefix}/actions/workflows/{self.workflow_id}":
            if self.workflow is None:
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, json=self.workflow)

        if path.startswith(f"{prefix}/contents/"):
            content_path = path[len(f"{prefix}/contents/"):]
            if content_path not in self.contents:
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, json=self.contents[content_path])

        return httpx.Response(404, json={"message": f"Unbekannter Pfad {path}"})


@pytest.fixture(scope="function")
def fake_api():
    """Fake GitHub API mit leerer Run-Historie."""
    return FakeGitHubApi()


@pytest_asyncio.fixture(scope="function")
async def github_client(fake_api):
    """
    GitHub-Client gegen die Fake API.

    Yields:
        GitHubClient
    """
    client = GitHubClient(
        REPOSITORY,
        token="test-token",
        api_url=API_URL,
        transport=httpx.MockTransport(fake_api.handler),
    )
    yield client
    await client.aclose()


@pytest.fixture(scope="function")
def summary_path(tmp_path):
    """
    Temporäre Job-Summary-Datei, auch als GITHUB_STEP_SUMMARY gesetzt.

    Yields:
        Path: Pfad zur Summary-Datei
    """
    path = tmp_path / "step_summary.md"
    path.write_text("")

    original = config.GITHUB_STEP_SUMMARY
    config.GITHUB_STEP_SUMMARY = str(path)

    yield path

    config.GITHUB_STEP_SUMMARY = original

"""Pytest configuration - loads .env and provides an in-memory transport."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

from gitlab_cli.core.client import APIClient, Credentials
from gitlab_cli.sdk import Gitlab

# Load .env from project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)

HOST = "https://gitlab.example.com"


@dataclass
class RecordedRequest:
    """A single request seen by the fake transport."""

    method: str
    url: str
    headers: dict[str, str]
    body: bytes | None

    def json(self) -> Any:
        return json.loads(self.body.decode("utf-8")) if self.body else None


@dataclass
class RecordingTransport:
    """Replays queued responses and records every request."""

    responses: list[tuple[int, bytes] | Exception] = field(default_factory=list)
    requests: list[RecordedRequest] = field(default_factory=list)

    def respond(self, status: int, body: Any = b"") -> "RecordingTransport":
        """Queue a response; non-bytes bodies are JSON-encoded."""
        if not isinstance(body, bytes):
            body = json.dumps(body).encode("utf-8")
        self.responses.append((status, body))
        return self

    def fail(self, error: Exception) -> "RecordingTransport":
        """Queue an error to raise instead of responding."""
        self.responses.append(error)
        return self

    def execute(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> tuple[int, bytes]:
        self.requests.append(RecordedRequest(method, url, dict(headers), body))
        if not self.responses:
            raise AssertionError(f"No response queued for {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last(self) -> RecordedRequest:
        return self.requests[-1]


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def api_client(transport: RecordingTransport) -> APIClient:
    return APIClient(host=HOST, transport=transport, credentials=Credentials.access_token("secret"))


@pytest.fixture
def gitlab(transport: RecordingTransport) -> Gitlab:
    return Gitlab(HOST, transport=transport, credentials=Credentials.access_token("secret"))


def _project_payload(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": 42,
        "description": None,
        "default_branch": "main",
        "visibility": "private",
        "ssh_url_to_repo": "git@gitlab.example.com:my/project.git",
        "http_url_to_repo": "https://gitlab.example.com/my/project.git",
        "web_url": "https://gitlab.example.com/my/project",
        "tag_list": ["python"],
        "name": "project",
        "name_with_namespace": "my / project",
        "path": "project",
        "path_with_namespace": "my/project",
        "issues_enabled": True,
        "open_issues_count": 3,
        "merge_requests_enabled": True,
        "created_at": "2017-10-01T12:00:00.000Z",
        "last_activity_at": "2017-10-02T12:00:00.000Z",
        "creator_id": 7,
        "namespace": {
            "id": 9,
            "name": "my",
            "path": "my",
            "kind": "group",
            "full_path": "my",
        },
        "import_status": "none",
        "archived": False,
        "shared_runners_enabled": True,
        "forks_count": 0,
        "star_count": 5,
        "public_jobs": True,
        "shared_with_groups": [],
        "only_allow_merge_if_pipeline_succeeds": False,
        "request_access_enabled": False,
        "approvals_before_merge": 0,
        "_links": {
            "self": "https://gitlab.example.com/api/v4/projects/42",
            "issues": "https://gitlab.example.com/api/v4/projects/42/issues",
        },
    }
    data.update(overrides)
    return data


@pytest.fixture
def project_payload():
    """Factory for a realistic project response body."""
    return _project_payload

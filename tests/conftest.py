"""Shared pytest fixtures and configuration."""

from functools import partial
from typing import Any, Optional

import httpx
import pytest

from fetchers.github import GitHubClient
from fetchers.github_oauth import GitHubOAuthClient
from models.config_models import Config, CredentialsConfig, ServerConfig


@pytest.fixture
def test_env(monkeypatch):
    """
    Set valid test environment variables.

    This fixture sets up valid test environment variables so config
    can be loaded during tests without requiring real credentials.
    """
    monkeypatch.setenv("GITHUB_CLIENT_ID", "Iv1.test_client_id")
    monkeypatch.setenv("GITHUB_CLIENT_SECRET", "test_client_secret_1234567890")
    monkeypatch.setenv("SESSION_SECRET", "test_session_secret")
    monkeypatch.setenv("GEMINI_API_KEY", "test_gemini_key")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    return {
        "github_client_id": "Iv1.test_client_id",
        "github_client_secret": "test_client_secret_1234567890",
        "session_secret": "test_session_secret",
        "gemini_api_key": "test_gemini_key",
        "log_level": "DEBUG",
    }


@pytest.fixture
def invalid_env(monkeypatch):
    """
    Set up invalid/missing environment variables for testing validation.
    """
    monkeypatch.setenv("GITHUB_CLIENT_ID", "")
    monkeypatch.setenv("GITHUB_CLIENT_SECRET", "")
    monkeypatch.setenv("SESSION_SECRET", "")


@pytest.fixture
def app_config():
    """A valid Config object built without touching the environment."""
    return Config(
        credentials=CredentialsConfig(
            github_client_id="Iv1.test_client_id",
            github_client_secret="test_client_secret",
            gemini_api_key="test_gemini_key",
        ),
        server=ServerConfig(session_secret="test_session_secret"),
        log_level="DEBUG",
    )


class FakeGitHub:
    """
    In-memory stand-in for api.github.com and github.com/login/oauth.

    Responses are registered per URL path. List responses for
    ``/repos/.../pulls`` honor the ``state`` query parameter the same way
    GitHub does. Every request is recorded in ``requests``.
    """

    def __init__(self):
        self.routes: dict[str, tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, body: Any, status_code: int = 200) -> None:
        self.routes[path] = (status_code, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        status_code, body = self.routes.get(path, (404, {"message": "Not Found"}))

        state = request.url.params.get("state")
        if path.endswith("/pulls") and isinstance(body, list) and state in ("open", "closed"):
            body = [pr for pr in body if pr.get("state") == state]

        return httpx.Response(status_code, json=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client_factory(self):
        """A GitHubClient factory wired to this fake."""
        return partial(GitHubClient, transport=self.transport())

    def oauth_client(self) -> GitHubOAuthClient:
        return GitHubOAuthClient(
            client_id="Iv1.test_client_id",
            client_secret="test_client_secret",
            redirect_uri="http://localhost:3000/auth/github/callback",
            transport=self.transport(),
        )

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture
def fake_github():
    return FakeGitHub()


def _make_repo(full_name: str) -> dict[str, Any]:
    owner, name = full_name.split("/", 1)
    return {
        "id": abs(hash(full_name)) % 100000,
        "name": name,
        "full_name": full_name,
        "owner": {"login": owner},
    }


def _make_pr(
    number: int,
    state: str = "open",
    created_at: str = "2025-01-10T09:00:00Z",
    updated_at: str = "2025-01-15T10:30:00Z",
    comments: Optional[int] = None,
    assignees: tuple[str, ...] = (),
    repo: str = "octocat/hello-world",
    title: Optional[str] = None,
) -> dict[str, Any]:
    pr = {
        "id": 1000 + number,
        "number": number,
        "title": title or f"PR {number}",
        "body": f"Body of PR {number}",
        "state": state,
        "created_at": created_at,
        "updated_at": updated_at,
        "assignees": [{"login": login} for login in assignees],
        "html_url": f"https://github.com/{repo}/pull/{number}",
        "user": {"login": "octocat"},
        "draft": False,
    }
    if comments is not None:
        pr["comments"] = comments
    return pr


@pytest.fixture
def make_repo():
    """Build a raw GitHub repository object."""
    return _make_repo


@pytest.fixture
def make_pr():
    """Build a raw GitHub pull request object."""
    return _make_pr


@pytest.fixture
def github_user():
    """Raw GitHub /user response."""
    return {
        "login": "octocat",
        "id": 583231,
        "name": "The Octocat",
        "avatar_url": "https://avatars.githubusercontent.com/u/583231",
        "html_url": "https://github.com/octocat",
        "email": "octocat@github.com",
        "public_repos": 8,
    }

"""GitHub REST API client used by the aggregator and the reviewer.

All calls are made on behalf of a signed-in user with their OAuth access
token. The client is an async context manager around a single
httpx.AsyncClient so that one aggregation reuses one connection pool.
"""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


class GitHubClient:
    """Fetch repositories, pull requests and the user profile from GitHub."""

    def __init__(
        self,
        token: str,
        base_url: str = GITHUB_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        """Initialize GitHub API client.

        Args:
            token: OAuth access token or personal access token
            base_url: API root (overridable for GitHub Enterprise)
            transport: Optional httpx transport (tests pass a MockTransport)
            timeout: Per-request timeout in seconds
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": "2022-11-28"
        }
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: Optional[dict] = None) -> Any:
        """GET a GitHub API path and return the decoded JSON body.

        Raises:
            httpx.HTTPStatusError: On any non-2xx response
            httpx.RequestError: On network failures
        """
        response = await self._client.get(path, params=params)

        remaining = response.headers.get("X-RateLimit-Remaining")
        limit = response.headers.get("X-RateLimit-Limit")
        if remaining and limit:
            logger.debug(f"Rate limit: {remaining}/{limit} remaining")

        if response.status_code in (401, 403):
            logger.error(
                f"Authentication error on {path}: {response.status_code} - "
                f"{response.text[:200]}"
            )

        response.raise_for_status()
        return response.json()

    async def get_authenticated_user(self) -> dict[str, Any]:
        """Fetch the profile of the token's owner (GET /user)."""
        user = await self._get("/user")
        logger.debug(f"Fetched authenticated user {user.get('login')}")
        return user

    async def list_repositories(self, per_page: int = 100) -> list[dict[str, Any]]:
        """List repositories the user owns or can access, most recently updated first.

        Only the first page is requested.
        """
        params = {
            "per_page": per_page,
            "sort": "updated",
            "direction": "desc",
        }
        repos = await self._get("/user/repos", params=params)
        logger.info(f"Fetched {len(repos)} repositories")
        return repos

    async def list_pull_requests(
        self,
        full_name: str,
        state: str = "all",
        per_page: int = 100
    ) -> list[dict[str, Any]]:
        """List pull requests of one repository, most recently updated first.

        Args:
            full_name: Repository in "owner/name" form
            state: "open", "closed" or "all"
            per_page: Page size (GitHub caps this at 100)

        Returns:
            Raw pull request dicts from the GitHub API
        """
        params = {
            "state": state,
            "sort": "updated",
            "direction": "desc",
            "per_page": per_page,
        }
        prs = await self._get(f"/repos/{full_name}/pulls", params=params)
        logger.debug(f"Fetched {len(prs)} PRs from {full_name} (state={state})")
        return prs

    async def get_pull_request(self, owner: str, repo: str, number: int) -> dict[str, Any]:
        """Fetch the full detail of a single pull request.

        Unlike the list endpoint, the detail carries ``changed_files``,
        ``additions``, ``deletions`` and ``comments``.
        """
        pr = await self._get(f"/repos/{owner}/{repo}/pulls/{number}")
        logger.debug(f"Fetched PR {owner}/{repo}#{number}: {pr.get('title', '')[:50]}")
        return pr

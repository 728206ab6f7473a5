"""
Pull request aggregation across all of a user's repositories.

Lists the user's repositories, fetches each repository's pull requests
concurrently, then merges, sorts, filters and truncates the result.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Callable, Optional

import httpx

from aggregator.filters import (
    filter_by_assignee,
    filter_by_date_range,
    filter_by_state,
    sort_pull_requests,
)
from fetchers.github import GitHubClient
from models.data_models import FilterConfig, PullRequest, RepositoryRef
from utils.exceptions import AuthenticationError, RetrievalError

logger = logging.getLogger(__name__)

MAX_RESULTS = 100
MAX_REPOSITORIES = 100


class PullRequestAggregator:
    """
    Builds the dashboard's pull request list for one user.

    A failure to list repositories is fatal. A failure to fetch one
    repository's pull requests only empties that repository's slot.
    """

    def __init__(
        self,
        client_factory: Callable[[str], GitHubClient] = GitHubClient,
        max_results: int = MAX_RESULTS
    ):
        """
        Args:
            client_factory: Builds a GitHubClient from an access token
            max_results: Upper bound on the returned list
        """
        self.client_factory = client_factory
        self.max_results = max_results

    async def fetch_and_filter(
        self,
        credential: Optional[str],
        config: FilterConfig,
        login: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> list[PullRequest]:
        """
        Fetch, merge, sort and filter the user's pull requests.

        Args:
            credential: GitHub access token of the requesting user
            config: Sort and filter options
            login: Requesting user's login, needed for assignee="self".
                   Looked up from the token when omitted.
            now: Reference time for date range filtering

        Returns:
            At most ``max_results`` pull requests, ordered by ``config.sort``

        Raises:
            AuthenticationError: If no credential is given (no calls are made)
            RetrievalError: If the repository list cannot be fetched
        """
        if not credential:
            raise AuthenticationError("Missing GitHub access token")

        async with self.client_factory(credential) as client:
            try:
                repos = await client.list_repositories(per_page=MAX_REPOSITORIES)
            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Failed to list repositories: {e}")
                raise RetrievalError(f"Failed to fetch repositories: {e}") from e

            if config.assignee == "self" and not login:
                try:
                    login = (await client.get_authenticated_user())["login"]
                except (httpx.HTTPError, ValueError, KeyError) as e:
                    logger.error(f"Failed to resolve authenticated user: {e}")
                    raise RetrievalError(f"Failed to fetch user profile: {e}") from e

            # One slot per repository, in repository order
            per_repo = await asyncio.gather(*(
                self._fetch_repository_pulls(client, repo, config, login)
                for repo in repos
            ))

        merged = [pr for prs in per_repo for pr in prs]
        ordered = sort_pull_requests(merged, config.sort)
        filtered = filter_by_date_range(ordered, config.date_range, now)
        result = filtered[:self.max_results]

        logger.info(
            f"Aggregated {len(result)} PRs from {len(repos)} repositories "
            f"(merged {len(merged)}, sort={config.sort}, status={config.status}, "
            f"assignee={config.assignee}, date_range={config.date_range})"
        )
        return result

    async def _fetch_repository_pulls(
        self,
        client: GitHubClient,
        repo: dict[str, Any],
        config: FilterConfig,
        login: Optional[str]
    ) -> list[PullRequest]:
        """Fetch one repository's PRs, returning [] if anything goes wrong."""
        full_name = repo.get("full_name", "<unknown>")
        try:
            repository = RepositoryRef.from_github(repo)
            raw_prs = await client.list_pull_requests(
                repository.full_name,
                state=config.status,
                per_page=MAX_RESULTS
            )
            prs = [PullRequest.from_github(raw, repository) for raw in raw_prs]
        except Exception as e:
            logger.warning(f"Error fetching PRs for {full_name}: {e}")
            return []

        prs = filter_by_state(prs, config.status)
        if config.assignee == "self":
            prs = filter_by_assignee(prs, login)
        return prs

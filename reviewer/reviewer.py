"""
PR Reviewer - fetches a pull request and asks the LLM for a review.

The generated text is returned verbatim; splitting it into sections is left
to whoever displays it.
"""

import logging
from typing import Any, Callable, Dict, Optional, Union

import httpx

from fetchers.github import GitHubClient
from models.data_models import ReviewResult
from reviewer.llm_client import LLMClient
from reviewer.prompt_template import NO_DESCRIPTION, REVIEW_PROMPT
from utils.exceptions import AuthenticationError, RetrievalError

logger = logging.getLogger(__name__)


def build_review_prompt(pr_data: Dict[str, Any]) -> str:
    """Fill the review template from a GitHub pull request detail object."""
    return REVIEW_PROMPT.format(
        title=pr_data.get("title") or "",
        description=pr_data.get("body") or NO_DESCRIPTION,
        changed_files=pr_data.get("changed_files", 0),
        additions=pr_data.get("additions", 0),
        deletions=pr_data.get("deletions", 0),
    )


class PullRequestReviewer:
    """
    On-demand AI review of a single pull request.

    Combines a GitHub detail fetch with one LLM call. Has no storage
    dependencies; nothing is persisted.
    """

    def __init__(
        self,
        llm_client: LLMClient,
        client_factory: Callable[[str], GitHubClient] = GitHubClient
    ):
        self.llm_client = llm_client
        self.client_factory = client_factory

    async def review_pull_request(
        self,
        credential: Optional[str],
        owner: Optional[str],
        repo: Optional[str],
        number: Optional[Union[int, str]]
    ) -> ReviewResult:
        """
        Generate a six-part review of a pull request.

        Args:
            credential: GitHub access token of the requesting user
            owner: Repository owner login
            repo: Repository name
            number: Pull request number

        Returns:
            ReviewResult with the raw review text and PR identification

        Raises:
            AuthenticationError: If no credential is given
            ValueError: If owner, repo or number is missing
            RetrievalError: If the PR detail cannot be fetched
            ModelConfigurationError: If the AI service does not know the model
        """
        if not credential:
            raise AuthenticationError("Missing GitHub access token")
        if not owner or not repo or not number:
            raise ValueError("owner, repo and pull request number are required")

        logger.info(f"Reviewing PR {owner}/{repo}#{number}...")

        async with self.client_factory(credential) as client:
            try:
                pr_data = await client.get_pull_request(owner, repo, number)
            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Failed to fetch PR {owner}/{repo}#{number}: {e}")
                raise RetrievalError("Failed to fetch PR details from GitHub") from e

        prompt = build_review_prompt(pr_data)
        logger.debug(f"Built review prompt ({len(prompt)} chars)")

        analysis = await self.llm_client.generate_review(prompt)

        return ReviewResult(
            analysis=analysis,
            title=pr_data.get("title") or "",
            number=pr_data.get("number", number),
            html_url=pr_data.get("html_url") or "",
        )

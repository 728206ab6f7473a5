"""
FastAPI dependencies shared by the routers.

The session cookie carries only a session id. The signed-in identity is
looked up in the server-side SessionStore once per request and handed to
handlers as an AuthContext; handlers never touch the session for
credentials themselves. Collaborators (GitHub client factory, aggregator,
reviewer) are also provided here so tests can swap them through
``app.dependency_overrides``.
"""

from functools import partial
from typing import Callable, Optional

from fastapi import Depends, HTTPException, Request

from aggregator.aggregator import PullRequestAggregator
from backend.session_store import SessionStore
from fetchers.github import GitHubClient
from fetchers.github_oauth import GitHubOAuthClient
from models.config_models import Config
from models.data_models import AuthContext, GitHubUser
from reviewer.llm_client import LLMClient
from reviewer.reviewer import PullRequestReviewer

SESSION_ID_KEY = "session_id"


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_optional_auth_context(
    request: Request,
    store: SessionStore = Depends(get_session_store)
) -> Optional[AuthContext]:
    """Build the request's AuthContext, or None when not signed in."""
    return store.get(request.session.get(SESSION_ID_KEY))


def get_session_user(
    context: Optional[AuthContext] = Depends(get_optional_auth_context)
) -> Optional[GitHubUser]:
    """Return the signed-in user, if any."""
    return context.user if context else None


def require_auth_context(
    context: Optional[AuthContext] = Depends(get_optional_auth_context)
) -> AuthContext:
    """Like get_optional_auth_context but answers 401 when not signed in."""
    if context is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return context


def get_github_client_factory(
    config: Config = Depends(get_config)
) -> Callable[[str], GitHubClient]:
    return partial(GitHubClient, timeout=config.server.github_timeout)


def get_oauth_client(config: Config = Depends(get_config)) -> GitHubOAuthClient:
    return GitHubOAuthClient(
        client_id=config.credentials.github_client_id,
        client_secret=config.credentials.github_client_secret,
        redirect_uri=config.server.github_redirect_uri,
        timeout=config.server.github_timeout,
    )


def get_aggregator(
    client_factory: Callable[[str], GitHubClient] = Depends(get_github_client_factory)
) -> PullRequestAggregator:
    return PullRequestAggregator(client_factory=client_factory)


def get_reviewer_factory(
    config: Config = Depends(get_config),
    client_factory: Callable[[str], GitHubClient] = Depends(get_github_client_factory)
) -> Callable[[], PullRequestReviewer]:
    """
    Return a callable that builds the reviewer on demand.

    The LLM client is only constructed when a review is requested, so a
    missing API key surfaces as a 500 on that request instead of breaking
    unrelated endpoints.
    """
    def build() -> PullRequestReviewer:
        provider = config.credentials.llm_provider
        llm_client = LLMClient(
            provider=provider,
            model=config.credentials.llm_model,
            api_key=config.credentials.api_key_for(provider),
        )
        return PullRequestReviewer(llm_client, client_factory=client_factory)

    return build

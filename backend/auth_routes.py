"""
Authentication and pull request routes.

Covers the GitHub OAuth sign-in flow, session inspection, logout and the
aggregated pull request listing.
"""

import logging
from typing import Callable, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import RedirectResponse

from aggregator.aggregator import PullRequestAggregator
from backend.dependencies import (
    SESSION_ID_KEY,
    get_aggregator,
    get_config,
    get_github_client_factory,
    get_oauth_client,
    get_session_store,
    get_session_user,
    require_auth_context,
)
from backend.session_store import SessionStore
from fetchers.github import GitHubClient
from fetchers.github_oauth import GitHubOAuthClient
from models.config_models import Config
from models.data_models import AuthContext, FilterConfig, GitHubUser, PullRequest
from utils.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/github")
def github_login(oauth: GitHubOAuthClient = Depends(get_oauth_client)):
    """Redirect the browser to GitHub's OAuth authorize page."""
    logger.info("Redirecting to GitHub for sign-in")
    return RedirectResponse(oauth.authorize_url(), status_code=302)


@router.get("/github/callback")
async def github_callback(
    request: Request,
    code: Optional[str] = Query(None, description="OAuth code issued by GitHub"),
    oauth: GitHubOAuthClient = Depends(get_oauth_client),
    client_factory: Callable[[str], GitHubClient] = Depends(get_github_client_factory),
    config: Config = Depends(get_config),
    store: SessionStore = Depends(get_session_store)
):
    """
    Finish the OAuth flow.

    Exchanges the code for an access token, loads the user's profile, keeps
    both server-side under a new session id and redirects to the dashboard.
    The cookie only carries that id.

    Raises:
    - 400: If no code was provided
    - 500: If the exchange or the profile fetch fails
    """
    if not code:
        logger.warning("OAuth callback without code")
        raise HTTPException(status_code=400, detail="No code provided")

    try:
        access_token = await oauth.exchange_code(code)
        async with client_factory(access_token) as client:
            raw_user = await client.get_authenticated_user()
        user = GitHubUser.from_github(raw_user)
    except Exception as e:
        logger.error(f"GitHub OAuth error: {e}")
        raise HTTPException(status_code=500, detail=f"OAuth Error: {str(e)}")

    store.delete(request.session.get(SESSION_ID_KEY))
    request.session.clear()
    request.session[SESSION_ID_KEY] = store.create(AuthContext(user=user, access_token=access_token))
    logger.info(f"Signed in {user.login}")

    return RedirectResponse(f"{config.server.frontend_url}/dashboard", status_code=302)


@router.get("/user", response_model=GitHubUser)
def get_user(user: Optional[GitHubUser] = Depends(get_session_user)):
    """Return the signed-in user's profile."""
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


@router.get("/status")
def auth_status(user: Optional[GitHubUser] = Depends(get_session_user)):
    """Report whether the session is signed in."""
    if user is None:
        return {"authenticated": False}
    return {"authenticated": True, "user": user.model_dump()}


@router.get("/pulls", response_model=list[PullRequest])
async def list_pulls(
    sort: str = Query(
        "updated",
        description=(
            "updated, created or comments (unknown values sort by updated). "
            "GitHub's pull request list carries no comment counts, so comments "
            "keeps the listing order"
        ),
    ),
    status: Literal["all", "open", "closed"] = Query("all", description="PR state filter"),
    assignee: Literal["all", "self"] = Query("all", description="'self' keeps PRs assigned to the signed-in user"),
    date_range: Literal["all", "today", "week", "month", "year"] = Query(
        "all", alias="dateRange", description="Keep PRs created within this window"
    ),
    auth: AuthContext = Depends(require_auth_context),
    aggregator: PullRequestAggregator = Depends(get_aggregator)
):
    """
    List the signed-in user's pull requests across their repositories.

    Returns at most 100 pull requests, sorted and filtered as requested.
    Repositories whose pull requests cannot be fetched are skipped.
    """
    filter_config = FilterConfig(
        sort=sort,
        status=status,
        assignee=assignee,
        date_range=date_range,
    )

    try:
        return await aggregator.fetch_and_filter(
            auth.access_token,
            filter_config,
            login=auth.user.login,
        )
    except AuthenticationError as e:
        logger.warning(f"Rejected PR listing: {e}")
        raise HTTPException(status_code=401, detail="Unauthorized")
    except Exception as e:
        logger.error(f"Error fetching PRs for {auth.user.login}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch pull requests: {str(e)}")


@router.post("/logout")
def logout(request: Request, store: SessionStore = Depends(get_session_store)):
    """Destroy the server-side session and clear the cookie."""
    try:
        context = store.delete(request.session.get(SESSION_ID_KEY))
        request.session.clear()
        login = context.user.login if context else None
    except Exception as e:
        logger.error(f"Error destroying session: {e}")
        raise HTTPException(status_code=500, detail="Failed to logout")

    logger.info(f"Signed out {login or 'anonymous session'}")
    return {"message": "Logged out successfully"}

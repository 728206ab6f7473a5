"""GitHub OAuth web flow: authorize URL and code-for-token exchange."""

import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from utils.exceptions import OAuthError

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
ACCESS_TOKEN_URL = "https://github.com/login/oauth/access_token"
DEFAULT_SCOPES = ("user:email", "repo")


class GitHubOAuthClient:
    """Client for GitHub's OAuth app endpoints."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.transport = transport
        self.timeout = timeout

    def authorize_url(self, scopes: tuple[str, ...] = DEFAULT_SCOPES) -> str:
        """Build the URL the browser is redirected to for sign-in."""
        query = urlencode({
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": " ".join(scopes),
        })
        return f"{AUTHORIZE_URL}?{query}"

    async def exchange_code(self, code: str) -> str:
        """
        Exchange an OAuth callback code for an access token.

        GitHub answers a bad or expired code with HTTP 200 and an ``error``
        field, so the body is checked as well as the status.

        Args:
            code: The ``code`` query parameter from the callback

        Returns:
            The access token

        Raises:
            OAuthError: If GitHub refuses the exchange
            httpx.HTTPError: On transport or HTTP status failures
        """
        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            response = await client.post(
                ACCESS_TOKEN_URL,
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "code": code,
                    "redirect_uri": self.redirect_uri,
                },
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            payload = response.json()

        if payload.get("error"):
            description = payload.get("error_description") or payload["error"]
            logger.error(f"OAuth code exchange rejected: {description}")
            raise OAuthError(description)

        token = payload.get("access_token")
        if not token:
            raise OAuthError("GitHub did not return an access token")

        logger.info("Exchanged OAuth code for access token")
        return token

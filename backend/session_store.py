"""
Server-side session storage.

The browser only ever holds a random session id; the GitHub profile and
access token stay in this process. Sessions end on logout or once they are
older than ``max_age`` seconds.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from models.data_models import AuthContext

logger = logging.getLogger(__name__)


class SessionStore:
    """In-memory map of session id -> AuthContext with expiry."""

    def __init__(self, max_age: int):
        self.max_age = timedelta(seconds=max_age)
        self._sessions: dict[str, tuple[AuthContext, datetime]] = {}

    def create(self, context: AuthContext, now: Optional[datetime] = None) -> str:
        """Store a signed-in identity and return its new session id."""
        now = now or datetime.now(timezone.utc)
        self._purge_expired(now)

        session_id = secrets.token_urlsafe(32)
        self._sessions[session_id] = (context, now + self.max_age)
        return session_id

    def get(self, session_id: Optional[str], now: Optional[datetime] = None) -> Optional[AuthContext]:
        """Return the identity for a live session, or None."""
        if not session_id:
            return None

        entry = self._sessions.get(session_id)
        if entry is None:
            return None

        context, expires_at = entry
        if (now or datetime.now(timezone.utc)) >= expires_at:
            logger.debug(f"Session for {context.user.login} expired")
            self._sessions.pop(session_id, None)
            return None
        return context

    def delete(self, session_id: Optional[str]) -> Optional[AuthContext]:
        """Destroy a session. Returns the identity it held, if any."""
        if not session_id:
            return None
        entry = self._sessions.pop(session_id, None)
        return entry[0] if entry else None

    def __len__(self) -> int:
        return len(self._sessions)

    def _purge_expired(self, now: datetime) -> None:
        expired = [sid for sid, (_, expires_at) in self._sessions.items() if now >= expires_at]
        for sid in expired:
            del self._sessions[sid]

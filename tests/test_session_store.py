"""Tests for the server-side session store."""

from datetime import datetime, timedelta, timezone

import pytest

from backend.session_store import SessionStore
from models.data_models import AuthContext, GitHubUser

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def context():
    return AuthContext(user=GitHubUser(login="octocat", id=583231), access_token="gho_token")


@pytest.fixture
def store():
    return SessionStore(max_age=3600)


class TestSessionStore:
    def test_create_and_get(self, store, context):
        session_id = store.create(context, now=NOW)

        assert store.get(session_id, now=NOW) == context
        assert "gho_token" not in session_id
        assert len(session_id) >= 32

    def test_ids_are_unique(self, store, context):
        assert store.create(context, now=NOW) != store.create(context, now=NOW)

    def test_unknown_or_missing_id(self, store):
        assert store.get("not-a-session", now=NOW) is None
        assert store.get(None, now=NOW) is None
        assert store.get("", now=NOW) is None

    def test_delete(self, store, context):
        session_id = store.create(context, now=NOW)

        assert store.delete(session_id) == context
        assert store.get(session_id, now=NOW) is None
        assert store.delete(session_id) is None
        assert store.delete(None) is None

    def test_expiry(self, store, context):
        session_id = store.create(context, now=NOW)

        assert store.get(session_id, now=NOW + timedelta(seconds=3599)) == context
        assert store.get(session_id, now=NOW + timedelta(seconds=3600)) is None
        assert len(store) == 0

    def test_create_purges_expired_sessions(self, store, context):
        store.create(context, now=NOW)
        store.create(context, now=NOW)

        store.create(context, now=NOW + timedelta(hours=2))

        assert len(store) == 1

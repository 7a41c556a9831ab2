# tests/conftest.py

from __future__ import annotations

from types import SimpleNamespace

import pytest
from fastapi import Depends, Request
from fastapi.testclient import TestClient

from app.config.settings import settings
from app.core.dependencies import (
    get_current_token,
    get_session_client,
    get_session_context,
    get_user_supabase,
)
from app.core.session import SessionContext
from app.database.supabase_client import get_supabase
from app.main import app

from .fakes import FakeDatabase, FakeSupabase


@pytest.fixture()
def db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture()
def alice(db: FakeDatabase) -> SimpleNamespace:
    """A signed-in session for alice@example.com."""
    return db.issue_session(db.add_user("alice@example.com"))


@pytest.fixture()
def bob(db: FakeDatabase) -> SimpleNamespace:
    return db.issue_session(db.add_user("bob@example.com"))


@pytest.fixture()
def client(db: FakeDatabase):
    """
    TestClient with every Supabase client swapped for a fake bound to `db`.

    The HTML session context is still restored from the request cookies, so
    tests drive sign-in the same way a browser does.
    """

    def session_context(request: Request) -> SessionContext:
        return SessionContext.from_tokens(
            FakeSupabase(db),
            request.cookies.get(settings.access_cookie_name),
            request.cookies.get(settings.refresh_cookie_name),
        )

    def user_supabase(token: str = Depends(get_current_token)) -> FakeSupabase:
        return FakeSupabase(db, access_token=token)

    app.dependency_overrides[get_supabase] = lambda: FakeSupabase(db)
    app.dependency_overrides[get_session_client] = lambda: FakeSupabase(db)
    app.dependency_overrides[get_user_supabase] = user_supabase
    app.dependency_overrides[get_session_context] = session_context
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def bearer(session: SimpleNamespace) -> dict[str, str]:
    return {"Authorization": f"Bearer {session.access_token}"}


def sign_in(client: TestClient, db: FakeDatabase, user: SimpleNamespace) -> SimpleNamespace:
    """Sign in through the login form like a browser; returns the session held in the cookies."""
    email = user.email
    client.post("/auth/login", data={"email": email, "password": db.users[email][1]}, follow_redirects=False)
    return db.sessions[client.cookies.get(settings.access_cookie_name)]

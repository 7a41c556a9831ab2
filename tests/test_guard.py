# tests/test_guard.py

from __future__ import annotations

import pytest

from app.core.errors import RequestError
from app.core.guard import AuthRedirectGuard
from app.core.session import SessionContext

from .fakes import FakeSupabase


def test_subscription_lives_only_inside_the_with_block(db, alice) -> None:
    supabase = FakeSupabase(db)
    context = SessionContext.from_tokens(supabase, alice.access_token, alice.refresh_token)

    with AuthRedirectGuard(context) as guard:
        assert len(supabase.auth.listeners) == 1
        assert guard.check() is True
    assert supabase.auth.listeners == []


def test_missing_session_redirects_to_login(db) -> None:
    context = SessionContext.from_tokens(FakeSupabase(db), None, None)

    with AuthRedirectGuard(context, login_path="/auth") as guard:
        assert guard.check() is False

    assert guard.redirected
    assert guard.redirect_to == "/auth"


def test_unusable_tokens_leave_the_context_signed_out(db) -> None:
    context = SessionContext.from_tokens(FakeSupabase(db), "at-bogus", "rt-bogus")

    assert context.session is None
    with AuthRedirectGuard(context) as guard:
        assert guard.check() is False


def test_unreachable_auth_service_is_an_error_not_a_logout(db, alice) -> None:
    db.expire_access_token(alice)
    db.auth_down = True
    context = SessionContext.from_tokens(FakeSupabase(db), alice.access_token, alice.refresh_token)

    with AuthRedirectGuard(context, login_path="/auth") as guard:
        with pytest.raises(RequestError, match="auth service unreachable"):
            guard.check()

    assert not guard.redirected
    assert alice.refresh_token in db.refresh_tokens


def test_session_loss_during_view_triggers_redirect(db, alice) -> None:
    supabase = FakeSupabase(db)
    context = SessionContext.from_tokens(supabase, alice.access_token, alice.refresh_token)

    with AuthRedirectGuard(context) as guard:
        guard.check()
        assert not guard.redirected
        supabase.auth.expire()
        assert guard.redirected
    assert context.user is None


def test_refreshed_session_updates_identity_and_tokens(db, alice) -> None:
    supabase = FakeSupabase(db)
    context = SessionContext.from_tokens(supabase, alice.access_token, alice.refresh_token)

    with AuthRedirectGuard(context) as guard:
        guard.check()
        db.expire_access_token(context.session)
        supabase.auth.set_session(context.session.access_token, context.session.refresh_token)

    assert not guard.redirected
    assert guard.user.id == alice.user.id
    assert context.session.access_token != alice.access_token
    assert supabase.postgrest.token == context.session.access_token


def test_notifications_after_teardown_are_ignored(db, alice) -> None:
    supabase = FakeSupabase(db)
    context = SessionContext.from_tokens(supabase, alice.access_token, alice.refresh_token)

    with AuthRedirectGuard(context) as guard:
        guard.check()
    supabase.auth.expire()

    assert not guard.redirected

# tests/test_task_controller.py

from __future__ import annotations

import asyncio

from app.core.guard import AuthRedirectGuard
from app.core.notifications import Notifier
from app.core.session import SessionContext
from app.modules.tasks.controller import TaskListController, ViewState
from app.modules.tasks.schemas import TaskCreate

from .fakes import FakeSupabase


def open_view(db, session=None):
    supabase = FakeSupabase(db)
    tokens = (session.access_token, session.refresh_token) if session else (None, None)
    context = SessionContext.from_tokens(supabase, *tokens)
    guard = AuthRedirectGuard(context, login_path="/auth")
    return supabase, guard, TaskListController(guard, Notifier())


def test_mount_without_session_redirects_before_any_crud(db) -> None:
    _, guard, controller = open_view(db)

    with guard:
        state = asyncio.run(controller.mount())

    assert state is ViewState.UNAUTHENTICATED
    assert guard.redirect_to == "/auth"
    assert db.crud_queries() == []


def test_mount_loads_tasks_sorted_by_due_date(db, alice) -> None:
    _, guard, controller = open_view(db, alice)

    async def scenario():
        await controller.mount()
        await controller.add_task(TaskCreate(description="later", due_date="2025-12-01"))
        await controller.add_task(TaskCreate(description="sooner", due_date="2025-11-01"))

    with guard:
        asyncio.run(scenario())

    assert controller.state is ViewState.READY
    assert [t.description for t in controller.tasks] == ["sooner", "later"]
    assert [t.description for t in controller.notifier.toasts] == ["Task added successfully"] * 2


def test_every_mutation_is_followed_by_a_refetch(db, alice) -> None:
    _, guard, controller = open_view(db, alice)

    async def scenario():
        await controller.mount()
        await controller.add_task(TaskCreate(description="water plants", due_date="2025-05-01"))
        task = controller.tasks[0]
        await controller.toggle_task(task.id, task.completed)
        assert controller.tasks[0].completed is True
        await controller.toggle_task(task.id, True)
        assert controller.tasks[0].completed is False
        await controller.remove_task(task.id)

    with guard:
        asyncio.run(scenario())

    assert controller.tasks == []
    assert db.crud_queries() == [
        ("tasks", "select"),
        ("tasks", "insert"), ("tasks", "select"),
        ("tasks", "update"), ("tasks", "select"),
        ("tasks", "update"), ("tasks", "select"),
        ("tasks", "delete"), ("tasks", "select"),
    ]
    assert controller.notifier.toasts[-1].description == "Task deleted successfully"


def test_fetch_failure_on_mount_shows_toast_and_stays_ready(db, alice) -> None:
    _, guard, controller = open_view(db, alice)
    db.fail_with = ConnectionError("network unreachable")

    with guard:
        state = asyncio.run(controller.mount())

    assert state is ViewState.READY
    assert controller.tasks == []
    toast = controller.notifier.toasts[0]
    assert toast.variant == "destructive"
    assert "network unreachable" in toast.description


def test_failed_mutation_keeps_previous_list(db, alice) -> None:
    _, guard, controller = open_view(db, alice)

    async def scenario():
        await controller.mount()
        await controller.add_task(TaskCreate(description="keep me", due_date="2025-05-01"))
        db.fail_with = ConnectionError("timed out")
        return await controller.remove_task(controller.tasks[0].id)

    with guard:
        removed = asyncio.run(scenario())

    assert removed is False
    assert [t.description for t in controller.tasks] == ["keep me"]
    assert controller.state is ViewState.READY
    assert controller.notifier.toasts[-1].title == "Error"


def test_session_expiry_mid_view_blocks_further_mutations(db, alice) -> None:
    supabase, guard, controller = open_view(db, alice)

    async def scenario():
        await controller.mount()
        supabase.auth.expire()
        return await controller.add_task(TaskCreate(description="too late", due_date="2025-05-01"))

    with guard:
        added = asyncio.run(scenario())

    assert added is False
    assert controller.state is ViewState.UNAUTHENTICATED
    assert guard.redirect_to == "/auth"
    assert ("tasks", "insert") not in db.crud_queries()


def test_logout_signs_out_and_redirects(db, alice) -> None:
    supabase, guard, controller = open_view(db, alice)

    async def scenario():
        await controller.mount()
        await controller.logout()

    with guard:
        asyncio.run(scenario())

    assert controller.state is ViewState.UNAUTHENTICATED
    assert guard.redirect_to == "/auth"
    assert supabase.auth.session is None
    assert alice.access_token not in db.sessions


def test_unreachable_auth_service_on_mount_shows_toast_without_redirect(db, alice) -> None:
    db.expire_access_token(alice)
    db.auth_down = True
    _, guard, controller = open_view(db, alice)

    async def scenario():
        await controller.mount()
        return await controller.add_task(TaskCreate(description="not now", due_date="2025-05-01"))

    with guard:
        added = asyncio.run(scenario())

    assert added is False
    assert controller.state is ViewState.READY
    assert not guard.redirected
    assert "auth service unreachable" in controller.notifier.toasts[0].description
    assert db.crud_queries() == []


def test_mutation_without_refetch_leaves_the_reload_to_the_caller(db, alice) -> None:
    _, guard, controller = open_view(db, alice)

    async def scenario():
        await controller.mount()
        return await controller.add_task(TaskCreate(description="one query", due_date="2025-05-01"), refetch=False)

    with guard:
        added = asyncio.run(scenario())

    assert added is True
    assert controller.tasks == []
    assert db.crud_queries() == [("tasks", "select"), ("tasks", "insert")]

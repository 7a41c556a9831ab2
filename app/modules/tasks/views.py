"""
Server-rendered task list.

Every request is one view lifetime: the guard subscribes to session changes,
the controller checks the session and talks to Supabase, then the guard
unsubscribes. Mutations answer with a 303 back to the list so a reload never
re-submits a form; their toasts ride along in the flash cookie.
"""

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError as PydanticValidationError
from app.config.settings import settings
from app.core.cookies import redirect, store_flash, store_session
from app.core.dependencies import get_session_context
from app.core.errors import ValidationError
from app.core.guard import AuthRedirectGuard
from app.core.notifications import Notifier
from app.core.session import SessionContext
from app.modules.tasks.controller import TaskListController
from app.modules.tasks.schemas import TaskCreate
from app.core.templating import templates
from typing import Dict, Optional
from uuid import UUID
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["views"], include_in_schema=False)


def _render(
    request: Request,
    controller: TaskListController,
    status_code: int = 200,
    errors: Optional[Dict[str, str]] = None,
    form: Optional[Dict[str, str]] = None,
) -> HTMLResponse:
    response = templates.TemplateResponse(
        request,
        "tasks.html",
        {
            "user": controller.guard.user,
            "tasks": controller.tasks,
            "toasts": controller.notifier.toasts,
            "errors": errors or {},
            "form": form or {},
        },
        status_code=status_code,
    )
    # toasts have been shown; drop the flash cookie
    store_flash(response, Notifier())
    store_session(response, controller.guard.context.session)
    return response


def _after_mutation(guard: AuthRedirectGuard, notifier: Notifier):
    if guard.redirected:
        return redirect(guard.redirect_to, notifier, signed_out=True)
    # the redirected GET is the refetch
    return redirect(settings.tasks_path, notifier, guard.context.session)


@router.get("", response_class=HTMLResponse)
async def task_list(
    request: Request,
    context: SessionContext = Depends(get_session_context)
):
    notifier = Notifier.load(request.cookies.get(settings.flash_cookie_name))
    with AuthRedirectGuard(context) as guard:
        controller = TaskListController(guard, notifier)
        await controller.mount()
    if guard.redirected:
        return redirect(guard.redirect_to, Notifier(), signed_out=True)
    return _render(request, controller)


@router.post("/add")
async def add_task(
    request: Request,
    description: str = Form(""),
    due_date: str = Form(""),
    context: SessionContext = Depends(get_session_context)
):
    notifier = Notifier()
    with AuthRedirectGuard(context) as guard:
        controller = TaskListController(guard, notifier)
        await controller.mount(fetch=False)
        if guard.redirected:
            return redirect(guard.redirect_to, notifier, signed_out=True)
        try:
            task_data = TaskCreate(description=description, due_date=due_date)
        except PydanticValidationError as e:
            error = ValidationError.from_pydantic(e)
            logger.info(f"Rejected task form: {error.detail}")
            await controller.refresh()
            return _render(
                request,
                controller,
                status_code=error.status_code,
                errors=error.fields,
                form={"description": description, "due_date": due_date},
            )
        await controller.add_task(task_data, refetch=False)
    return _after_mutation(guard, notifier)


@router.post("/{task_id}/toggle")
async def toggle_task(
    task_id: UUID,
    completed: bool = Form(False),
    context: SessionContext = Depends(get_session_context)
):
    """``completed`` is the task's current flag as rendered; the new flag is its inverse."""
    notifier = Notifier()
    with AuthRedirectGuard(context) as guard:
        controller = TaskListController(guard, notifier)
        await controller.mount(fetch=False)
        await controller.toggle_task(str(task_id), completed, refetch=False)
    return _after_mutation(guard, notifier)


@router.post("/{task_id}/delete")
async def delete_task(
    task_id: UUID,
    context: SessionContext = Depends(get_session_context)
):
    notifier = Notifier()
    with AuthRedirectGuard(context) as guard:
        controller = TaskListController(guard, notifier)
        await controller.mount(fetch=False)
        await controller.remove_task(str(task_id), refetch=False)
    return _after_mutation(guard, notifier)


@router.post("/logout")
async def logout(context: SessionContext = Depends(get_session_context)):
    notifier = Notifier()
    user_id = context.user_id
    with AuthRedirectGuard(context) as guard:
        controller = TaskListController(guard, notifier)
        await controller.logout()
    logger.info(f"User {user_id} logged out")
    return redirect(guard.redirect_to, notifier, signed_out=True)

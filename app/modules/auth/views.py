from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse
from pydantic import ValidationError as PydanticValidationError
from types import SimpleNamespace
from app.config.settings import settings
from app.core.cookies import redirect, store_flash
from app.core.dependencies import get_auth_service, get_session_context
from app.core.errors import RequestError, ValidationError
from app.core.notifications import Notifier
from app.core.session import SessionContext
from app.modules.auth.schemas import LoginRequest, RegisterRequest
from app.modules.auth.service import AuthService
from app.core.templating import templates
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["views"], include_in_schema=False)


@router.get("", response_class=HTMLResponse)
async def auth_page(
    request: Request,
    context: SessionContext = Depends(get_session_context)
):
    """Login / sign-up view. Already signed-in users go straight to their tasks."""
    notifier = Notifier.load(request.cookies.get(settings.flash_cookie_name))
    try:
        if await run_in_threadpool(context.get_current_session):
            return redirect(settings.tasks_path, Notifier(), context.session)
    except RequestError as e:
        notifier.error(e.detail)
    response = templates.TemplateResponse(request, "auth.html", {"toasts": notifier.toasts})
    store_flash(response, Notifier())
    return response


@router.post("/login")
async def login(
    email: str = Form(""),
    password: str = Form(""),
    service: AuthService = Depends(get_auth_service)
):
    notifier = Notifier()
    try:
        login_data = LoginRequest(email=email, password=password)
        token = await run_in_threadpool(service.login, login_data)
    except PydanticValidationError as e:
        notifier.error(ValidationError.from_pydantic(e).detail)
        return redirect(settings.login_path, notifier)
    except HTTPException as e:
        notifier.error(e.detail)
        return redirect(settings.login_path, notifier)
    logger.info(f"User {token.user_id} signed in")
    session = SimpleNamespace(access_token=token.access_token, refresh_token=token.refresh_token)
    return redirect(settings.tasks_path, notifier, session)


@router.post("/register")
async def register(
    email: str = Form(""),
    password: str = Form(""),
    service: AuthService = Depends(get_auth_service)
):
    notifier = Notifier()
    try:
        register_data = RegisterRequest(email=email, password=password)
        result = await run_in_threadpool(service.register, register_data)
    except PydanticValidationError as e:
        notifier.error(ValidationError.from_pydantic(e).detail)
        return redirect(settings.login_path, notifier)
    except HTTPException as e:
        notifier.error(e.detail)
        return redirect(settings.login_path, notifier)
    logger.info(f"User {result.user_id} registered")
    if not result.access_token:
        notifier.success(result.message)
        return redirect(settings.login_path, notifier)
    session = SimpleNamespace(access_token=result.access_token, refresh_token=result.refresh_token)
    return redirect(settings.tasks_path, notifier, session)

from fastapi import Response
from fastapi.responses import RedirectResponse
from app.config.settings import settings
from app.core.notifications import Notifier


def _set(response: Response, name: str, value: str) -> None:
    response.set_cookie(name, value, httponly=True, samesite="lax", secure=settings.cookie_secure, path="/")


def store_session(response: Response, session) -> None:
    """Write the session tokens. Without a session the cookies are left as they are."""
    if session is None:
        return
    _set(response, settings.access_cookie_name, session.access_token)
    _set(response, settings.refresh_cookie_name, session.refresh_token)


def clear_session(response: Response) -> None:
    response.delete_cookie(settings.access_cookie_name, path="/")
    response.delete_cookie(settings.refresh_cookie_name, path="/")


def store_flash(response: Response, notifier: Notifier) -> None:
    if notifier.toasts:
        _set(response, settings.flash_cookie_name, notifier.dump())
    else:
        response.delete_cookie(settings.flash_cookie_name, path="/")


def redirect(url: str, notifier: Notifier, session=None, signed_out: bool = False) -> RedirectResponse:
    """
    303 redirect carrying the notifier's toasts and the (possibly refreshed)
    session. signed_out=True drops the session cookies instead.
    """
    response = RedirectResponse(url=url, status_code=303)
    store_flash(response, notifier)
    if signed_out:
        clear_session(response)
    else:
        store_session(response, session)
    return response

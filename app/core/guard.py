from app.config.settings import settings
from app.core.session import SessionContext
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class AuthRedirectGuard:
    """
    Keeps a view's idea of "logged in" in line with Supabase Auth.

    Use as a context manager: the session-change subscription lives exactly as
    long as the ``with`` block. Any notification without a session marks the
    view for redirect to the login path.
    """

    def __init__(self, context: SessionContext, login_path: Optional[str] = None):
        self.context = context
        self.login_path = login_path or settings.login_path
        self.user = None
        self.redirect_to: Optional[str] = None
        self._subscription = None

    def __enter__(self) -> "AuthRedirectGuard":
        self._subscription = self.context.subscribe(self._on_session_change)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        return False

    @property
    def redirected(self) -> bool:
        return self.redirect_to is not None

    def check(self) -> bool:
        """Initial session check. True when the view may proceed."""
        session = self.context.get_current_session()
        self._on_session_change("INITIAL_SESSION", session)
        return session is not None

    def redirect(self) -> None:
        if self.redirect_to is None:
            logger.info(f"No session, redirecting to {self.login_path}")
        self.redirect_to = self.login_path

    def _on_session_change(self, event: str, session) -> None:
        if session is None:
            self.redirect()
        else:
            self.user = session.user

"""
Per-view session context.

Wraps the Supabase Auth client of one view and holds the identity it
currently sees. Views receive one of these explicitly instead of reading a
process-wide session.

Only a rejection from Supabase Auth (bad or revoked tokens) means "signed
out". When the auth service cannot be reached the stored tokens may still be
good, so that case is a RequestError and the caller keeps the session cookies.
"""

from supabase import Client
from supabase_auth.errors import AuthError as SupabaseAuthError, AuthRetryableError
from app.core.errors import RequestError
from typing import Any, Callable, Optional
import logging

logger = logging.getLogger(__name__)

SessionCallback = Callable[[str, Optional[Any]], None]


def _unavailable(e: Exception) -> RequestError:
    logger.error(f"Auth service unavailable: {e}")
    return RequestError(f"Authentication service unavailable: {e}")


class SessionContext:
    def __init__(self, client: Client):
        self.client = client
        self.session = None
        self.user = None
        self.error: Optional[RequestError] = None

    @classmethod
    def from_tokens(
        cls,
        client: Client,
        access_token: Optional[str],
        refresh_token: Optional[str],
    ) -> "SessionContext":
        """Restore a session from stored tokens; tokens rejected by Supabase Auth leave the context signed out."""
        context = cls(client)
        if access_token and refresh_token:
            try:
                response = client.auth.set_session(access_token, refresh_token)
                context._update(response.session)
            except AuthRetryableError as e:
                context.error = _unavailable(e)
            except SupabaseAuthError as e:
                logger.info(f"Discarding stored session: {e}")
            except Exception as e:
                context.error = _unavailable(e)
        return context

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user else None

    def get_current_session(self):
        """Current session or None. Raises RequestError when the auth service could not answer."""
        if self.error is not None:
            raise self.error
        try:
            session = self.client.auth.get_session()
        except AuthRetryableError as e:
            raise _unavailable(e)
        except SupabaseAuthError as e:
            logger.info(f"Session no longer valid: {e}")
            session = None
        except Exception as e:
            raise _unavailable(e)
        self._update(session)
        return session

    def subscribe(self, callback: SessionCallback):
        """Register for session-change notifications. Returns a subscription with unsubscribe()."""
        def listener(event, session):
            self._update(session)
            callback(event, session)
        return self.client.auth.on_auth_state_change(listener)

    def sign_out(self) -> None:
        self.client.auth.sign_out()
        self._update(None)

    def _update(self, session) -> None:
        self.session = session
        self.user = session.user if session else None
        if session is not None:
            # Row-level security evaluates auth.uid() from this header
            self.client.postgrest.auth(session.access_token)

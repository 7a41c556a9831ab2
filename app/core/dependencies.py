"""
Core dependencies for route protection and per-caller Supabase clients
"""

from fastapi import Depends, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config.settings import settings
from app.core.errors import AuthError
from app.core.session import SessionContext
from app.database.supabase_client import SupabaseClient, get_supabase
from app.modules.auth.service import AuthService
from supabase import Client
from typing import Optional

# auto_error=False so a missing header is a 401 AuthError, not FastAPI's default 403
security = HTTPBearer(auto_error=False)


def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    if credentials is None or not credentials.credentials:
        raise AuthError("Not authenticated")
    return credentials.credentials


def get_session_client() -> Client:
    """Client with its own auth state; sign-in on it never leaks into other requests."""
    return SupabaseClient.for_session()


def get_auth_service(supabase: Client = Depends(get_session_client)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    token: str = Depends(get_current_token),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Extract current user info from JWT token"""
    return AuthService(supabase).get_current_user(token)


def get_user_supabase(token: str = Depends(get_current_token)) -> Client:
    """Client whose table queries run as the token's user, so row level security applies."""
    return SupabaseClient.for_access_token(token)


def get_session_context(request: Request) -> SessionContext:
    """Session for the HTML views, restored from the session cookies."""
    return SessionContext.from_tokens(
        SupabaseClient.for_session(),
        request.cookies.get(settings.access_cookie_name),
        request.cookies.get(settings.refresh_cookie_name),
    )

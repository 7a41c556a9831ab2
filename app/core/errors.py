"""
Error taxonomy shared by the JSON API and the HTML view.

All of these are HTTPException subclasses so FastAPI renders them like any
other error raised from a route or service.
"""

from fastapi import HTTPException, status
from typing import Dict, List, Optional


class AuthError(HTTPException):
    """No session, or the session expired. The view redirects to login."""

    def __init__(self, detail: str = "Invalid or expired session"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ValidationError(HTTPException):
    """A required field is missing or malformed; submission is blocked."""

    def __init__(self, detail: str = "Invalid input", fields: Optional[Dict[str, str]] = None):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)
        self.fields = fields or {}

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationError":
        fields: Dict[str, str] = {}
        for err in exc.errors():
            loc: List = [str(part) for part in err.get("loc", ()) if part != "body"]
            fields[".".join(loc) or "__root__"] = err.get("msg", "Invalid value")
        detail = "; ".join(f"{name}: {msg}" for name, msg in fields.items())
        return cls(detail=detail or "Invalid input", fields=fields)


class RequestError(HTTPException):
    """Transport failure or policy rejection while talking to Supabase."""

    def __init__(self, detail: str, status_code: int = status.HTTP_502_BAD_GATEWAY):
        super().__init__(status_code=status_code, detail=detail)


class FetchError(RequestError):
    """RequestError raised while listing tasks."""

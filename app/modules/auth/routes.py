from fastapi import APIRouter, Depends
from app.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
)
from app.modules.auth.service import AuthService
from app.core.dependencies import get_auth_service, get_current_token, get_current_user_id
from typing import Dict

# Plain def routes: the supabase client is synchronous, FastAPI runs these in its threadpool
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access and refresh tokens"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
def logout(
    current_user: Dict = Depends(get_current_user_id),
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and revoke the session"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me")
def get_current_user(
    current_user: Dict = Depends(get_current_user_id)
):
    """Get current authenticated user"""
    return current_user

"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from storefront.api.dependencies import (
    CurrentSession,
    clear_session_cookie,
    get_auth_service,
    get_session_if_available,
    get_session_token,
    set_session_cookie,
)
from storefront.schemas.auth import AuthResponse, AuthStatusResponse, UserLogin, UserRegister
from storefront.schemas.common import MessageResponse
from storefront.schemas.user import UserResponse
from storefront.services.auth import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    response: Response,
    service: Annotated[AuthService, Depends(get_auth_service)],
    current_token: Annotated[str | None, Depends(get_session_token)],
):
    """Register a new user and log them in."""
    user, token = service.register(user_data, current_token)
    set_session_cookie(response, token)
    return AuthResponse(message="Registration successful", user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    response: Response,
    service: Annotated[AuthService, Depends(get_auth_service)],
    current_token: Annotated[str | None, Depends(get_session_token)],
):
    """Login with email and password."""
    user, token = service.login(credentials, current_token)
    set_session_cookie(response, token)
    return AuthResponse(message="Login successful", user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    service: Annotated[AuthService, Depends(get_auth_service)],
    token: Annotated[str | None, Depends(get_session_token)],
):
    """End the current session. Safe to call when already logged out."""
    service.logout(token)
    clear_session_cookie(response)
    return MessageResponse(message="Logout successful")


@router.get("/status", response_model=AuthStatusResponse, response_model_exclude_none=True)
def auth_status(
    service: Annotated[AuthService, Depends(get_auth_service)],
    session: Annotated[CurrentSession | None, Depends(get_session_if_available)],
):
    """Report whether the caller is logged in."""
    return service.status(session.identity if session else None)

"""User profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from storefront.api.dependencies import CurrentSession, get_auth_service, parse_id, require_user
from storefront.schemas.user import UserDetailResponse, UserResponse, UserUpdate, UserUpdateResponse
from storefront.services.auth import AuthService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/{user_id}", response_model=UserDetailResponse)
def get_user(
    user_id: str,
    session: Annotated[CurrentSession, Depends(require_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Get a profile. Users see their own; admins see anyone's."""
    user = service.get_profile(parse_id(user_id, "user"), session.identity)
    return UserDetailResponse(data=UserResponse.model_validate(user))


@router.put("/{user_id}", response_model=UserUpdateResponse)
def update_user(
    user_id: str,
    user_data: UserUpdate,
    session: Annotated[CurrentSession, Depends(require_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Update name, phone or password."""
    user = service.update_profile(
        parse_id(user_id, "user"), user_data, session.identity, session.token
    )
    return UserUpdateResponse(
        message="Profile updated successfully", data=UserResponse.model_validate(user)
    )

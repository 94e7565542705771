"""User profile schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """Outbound user view. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: str
    role: str
    active: bool
    created_at: datetime
    updated_at: datetime


class UserUpdate(BaseModel):
    """Profile patch. Only the fields present are applied."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    current_password: str | None = Field(None, max_length=72)
    new_password: str | None = Field(None, max_length=72)


class UserDetailResponse(BaseModel):
    """Single user envelope."""

    success: bool = True
    data: UserResponse


class UserUpdateResponse(BaseModel):
    """Updated user envelope."""

    success: bool = True
    message: str
    data: UserResponse

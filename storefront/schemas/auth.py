"""Authentication schemas."""

from pydantic import BaseModel, Field

from storefront.schemas.user import UserResponse


class UserRegister(BaseModel):
    """User registration request."""

    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=72)  # bcrypt only reads 72 bytes
    phone: str | None = Field(None, max_length=50)


class UserLogin(BaseModel):
    """User login request."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=72)


class AuthResponse(BaseModel):
    """Registration/login response."""

    success: bool = True
    message: str
    user: UserResponse


class SessionUser(BaseModel):
    """Identity carried by the session."""

    id: int
    name: str
    email: str
    role: str


class AuthStatusResponse(BaseModel):
    """Whether the caller holds a live session."""

    authenticated: bool
    user: SessionUser | None = None

"""Pydantic schemas for API requests and responses."""

from storefront.schemas.auth import AuthResponse, AuthStatusResponse, UserLogin, UserRegister
from storefront.schemas.common import MessageResponse, Pagination
from storefront.schemas.inquiry import InquiryCreate, InquiryResponse, InquiryUpdate
from storefront.schemas.product import ProductResponse
from storefront.schemas.user import UserResponse, UserUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "AuthStatusResponse",
    "UserResponse",
    "UserUpdate",
    "ProductResponse",
    "InquiryCreate",
    "InquiryUpdate",
    "InquiryResponse",
    "Pagination",
    "MessageResponse",
]

"""Inquiry schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from storefront.schemas.common import Pagination


class InquiryCreate(BaseModel):
    """Contact form submission."""

    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=255)
    phone: str | None = Field(None, max_length=50)
    subject: str = Field(..., max_length=255)
    message: str = Field(..., max_length=10000)


class InquiryUpdate(BaseModel):
    """Admin update of an inquiry's workflow fields."""

    model_config = ConfigDict(extra="forbid")

    status: str | None = Field(None, max_length=50)  # free-form, e.g. 'new', 'resolved'
    read: bool | None = None


class InquiryResponse(BaseModel):
    """Inquiry response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: str
    subject: str
    message: str
    status: str
    read: bool
    user_id: int | None
    created_at: datetime
    updated_at: datetime


class InquiryCreateResponse(BaseModel):
    """Envelope for a new inquiry."""

    success: bool = True
    message: str
    data: InquiryResponse


class InquiryListResponse(BaseModel):
    """A user's own inquiries."""

    success: bool = True
    data: list[InquiryResponse]
    count: int


class InquiryPageResponse(BaseModel):
    """Admin inquiry queue page."""

    success: bool = True
    data: list[InquiryResponse]
    pagination: Pagination


class InquiryUpdateResponse(BaseModel):
    """Envelope for an updated inquiry."""

    success: bool = True
    message: str
    data: InquiryResponse

"""Inquiry API endpoints for visitors and customers."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from storefront.api.dependencies import (
    CurrentSession,
    get_current_session,
    get_inquiry_service,
    require_user,
)
from storefront.schemas.inquiry import (
    InquiryCreate,
    InquiryCreateResponse,
    InquiryListResponse,
    InquiryResponse,
)
from storefront.services.inquiry import InquiryService

router = APIRouter(prefix="/api", tags=["inquiries"])


@router.post(
    "/inquiries", response_model=InquiryCreateResponse, status_code=status.HTTP_201_CREATED
)
def create_inquiry(
    inquiry_data: InquiryCreate,
    service: Annotated[InquiryService, Depends(get_inquiry_service)],
    session: Annotated[CurrentSession | None, Depends(get_current_session)],
):
    """Submit an inquiry. Logged-in users become its owner."""
    inquiry = service.create(inquiry_data, session.identity.user_id if session else None)
    return InquiryCreateResponse(
        message="Inquiry submitted successfully",
        data=InquiryResponse.model_validate(inquiry),
    )


@router.get("/user/inquiries", response_model=InquiryListResponse)
def list_my_inquiries(
    session: Annotated[CurrentSession, Depends(require_user)],
    service: Annotated[InquiryService, Depends(get_inquiry_service)],
):
    """List the current user's inquiries, newest first."""
    inquiries = service.list_for_user(session.identity.user_id)
    return InquiryListResponse(
        data=[InquiryResponse.model_validate(i) for i in inquiries],
        count=len(inquiries),
    )

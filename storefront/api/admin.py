"""Admin API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from storefront.api.dependencies import (
    CurrentSession,
    get_inquiry_service,
    parse_id,
    require_admin,
)
from storefront.schemas.common import Pagination
from storefront.schemas.inquiry import (
    InquiryPageResponse,
    InquiryResponse,
    InquiryUpdate,
    InquiryUpdateResponse,
)
from storefront.services.inquiry import InquiryService

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/inquiries", response_model=InquiryPageResponse)
def list_inquiries(
    _admin: Annotated[CurrentSession, Depends(require_admin)],
    service: Annotated[InquiryService, Depends(get_inquiry_service)],
    status: str | None = Query(None, max_length=50),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
):
    """Page through all inquiries, optionally by status."""
    inquiries, total = service.list_for_admin(status, page, limit)
    return InquiryPageResponse(
        data=[InquiryResponse.model_validate(i) for i in inquiries],
        pagination=Pagination.build(page, limit, total),
    )


@router.put("/inquiries/{inquiry_id}", response_model=InquiryUpdateResponse)
def update_inquiry(
    inquiry_id: str,
    update: InquiryUpdate,
    _admin: Annotated[CurrentSession, Depends(require_admin)],
    service: Annotated[InquiryService, Depends(get_inquiry_service)],
):
    """Change an inquiry's status or read flag."""
    inquiry = service.update_status(parse_id(inquiry_id, "inquiry"), update)
    return InquiryUpdateResponse(
        message="Inquiry updated successfully", data=InquiryResponse.model_validate(inquiry)
    )

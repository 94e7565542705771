"""Customer inquiry workflow."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from storefront.errors import NotFoundError, ValidationError
from storefront.models.enums import DEFAULT_INQUIRY_STATUS
from storefront.models.inquiry import Inquiry
from storefront.schemas.inquiry import InquiryCreate, InquiryUpdate

logger = logging.getLogger(__name__)


class InquiryService:
    """Create inquiries for anyone; list and triage them for owners and admins.

    Access control happens before these methods are called: the API guards
    only route admins to ``list_for_admin`` and ``update_status``.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, data: InquiryCreate, submitter_user_id: int | None = None) -> Inquiry:
        """Store a new inquiry.

        Duplicates are allowed. The owner is the authenticated submitter, or
        None for anonymous visitors.
        """
        fields = (data.name, data.email, data.subject, data.message)
        if not all(value and value.strip() for value in fields):
            raise ValidationError("Name, email, subject and message are required")

        inquiry = Inquiry(
            name=data.name.strip(),
            email=data.email.strip(),
            phone=data.phone or "",
            subject=data.subject.strip(),
            message=data.message,
            status=DEFAULT_INQUIRY_STATUS,
            read=False,
            user_id=submitter_user_id,
        )
        self.db.add(inquiry)
        self.db.commit()
        self.db.refresh(inquiry)

        logger.info(f"Inquiry {inquiry.id} submitted (user={submitter_user_id})")
        return inquiry

    def list_for_user(self, user_id: int) -> list[Inquiry]:
        """A user's own inquiries, newest first."""
        return (
            self.db.query(Inquiry)
            .filter(Inquiry.user_id == user_id)
            .order_by(Inquiry.created_at.desc(), Inquiry.id.desc())
            .all()
        )

    def list_for_admin(
        self, status: str | None = None, page: int = 1, limit: int = 50
    ) -> tuple[list[Inquiry], int]:
        """One page of the inquiry queue and the total number of matches."""
        query = self.db.query(Inquiry)
        if status:
            query = query.filter(Inquiry.status == status)

        total = query.count()
        inquiries = (
            query.order_by(Inquiry.created_at.desc(), Inquiry.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return inquiries, total

    def update_status(self, inquiry_id: int, update: InquiryUpdate) -> Inquiry:
        """Set status and/or read flag on an inquiry."""
        inquiry = self.db.query(Inquiry).filter(Inquiry.id == inquiry_id).first()
        if inquiry is None:
            raise NotFoundError("Inquiry not found")

        status = (update.status or "").strip()
        if status:
            inquiry.status = status
        if update.read is not None:
            inquiry.read = update.read
        inquiry.updated_at = datetime.now(UTC)

        self.db.commit()
        self.db.refresh(inquiry)

        logger.info(f"Inquiry {inquiry.id} updated: status={inquiry.status} read={inquiry.read}")
        return inquiry

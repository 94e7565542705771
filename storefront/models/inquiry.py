"""Inquiry model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from storefront.database import Base
from storefront.models.enums import DEFAULT_INQUIRY_STATUS
from storefront.models.mixins import TimestampMixin


class Inquiry(Base, TimestampMixin):
    """Customer inquiry submitted from the contact form."""

    __tablename__ = "inquiries"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False, default="")
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(50), nullable=False, default=DEFAULT_INQUIRY_STATUS, index=True)
    read = Column(Boolean, nullable=False, default=False)
    # Null for anonymous submissions
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    user = relationship("User", backref="inquiries")

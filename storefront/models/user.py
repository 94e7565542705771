"""User model."""

from sqlalchemy import Column, Integer, String

from storefront.database import Base
from storefront.models.enums import Role
from storefront.models.mixins import ActiveFlagMixin, TimestampMixin


class User(Base, TimestampMixin, ActiveFlagMixin):
    """Registered customer or admin account."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)  # stored lowercased
    phone = Column(String(50), nullable=False, default="")
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.USER.value)

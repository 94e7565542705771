"""Product model."""

from sqlalchemy import Column, Integer, String, Text

from storefront.database import Base
from storefront.models.mixins import ActiveFlagMixin, TimestampMixin


class Product(Base, TimestampMixin, ActiveFlagMixin):
    """Catalog entry. Read-only through the API."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String(100), nullable=False, index=True)
    image = Column(String(500), nullable=True)  # URL or asset path

"""SQLAlchemy models."""

from storefront.models.inquiry import Inquiry
from storefront.models.product import Product
from storefront.models.user import User

__all__ = [
    "User",
    "Product",
    "Inquiry",
]

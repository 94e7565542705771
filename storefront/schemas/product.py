"""Product schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from storefront.schemas.common import Pagination


class ProductResponse(BaseModel):
    """Product response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    category: str
    image: str | None
    active: bool
    created_at: datetime
    updated_at: datetime


class ProductListResponse(BaseModel):
    """Paged product listing."""

    success: bool = True
    data: list[ProductResponse]
    pagination: Pagination


class ProductCategoryResponse(BaseModel):
    """Products in a single category."""

    success: bool = True
    data: list[ProductResponse]
    category: str
    count: int


class ProductDetailResponse(BaseModel):
    """Single product envelope."""

    success: bool = True
    data: ProductResponse

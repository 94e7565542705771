"""Product API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from storefront.api.dependencies import get_product_service, parse_id
from storefront.schemas.common import Pagination
from storefront.schemas.product import (
    ProductCategoryResponse,
    ProductDetailResponse,
    ProductListResponse,
    ProductResponse,
)
from storefront.services.catalog import DEFAULT_CATEGORY_LIMIT, DEFAULT_PAGE_SIZE, ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
def list_products(
    service: Annotated[ProductService, Depends(get_product_service)],
    category: str | None = None,
    search: str | None = Query(None, max_length=100),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
):
    """List products, optionally filtered by category or a search term."""
    products, total = service.list_products(category, search, page, limit)
    return ProductListResponse(
        data=[ProductResponse.model_validate(p) for p in products],
        pagination=Pagination.build(page, limit, total),
    )


@router.get("/category/{category}", response_model=ProductCategoryResponse)
def list_products_by_category(
    category: str,
    service: Annotated[ProductService, Depends(get_product_service)],
    limit: int = Query(DEFAULT_CATEGORY_LIMIT, ge=1, le=100),
):
    """List the newest products in a category."""
    products = service.list_by_category(category, limit)
    return ProductCategoryResponse(
        data=[ProductResponse.model_validate(p) for p in products],
        category=category,
        count=len(products),
    )


@router.get("/{product_id}", response_model=ProductDetailResponse)
def get_product(
    product_id: str,
    service: Annotated[ProductService, Depends(get_product_service)],
):
    """Get a specific product."""
    product = service.get_product(parse_id(product_id, "product"))
    return ProductDetailResponse(data=ProductResponse.model_validate(product))

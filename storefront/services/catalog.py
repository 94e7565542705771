"""Product catalog queries."""

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session

from storefront.errors import NotFoundError
from storefront.models.product import Product

DEFAULT_PAGE_SIZE = 50
DEFAULT_CATEGORY_LIMIT = 20


class ProductService:
    """Read-only access to active products."""

    def __init__(self, db: Session):
        self.db = db

    def _active(self) -> Query:
        return self.db.query(Product).filter(Product.active.is_(True))

    def list_products(
        self,
        category: str | None = None,
        search: str | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> tuple[list[Product], int]:
        """Return one page of products and the total number of matches."""
        query = self._active()
        if category:
            query = query.filter(Product.category == category)
        if search:
            needle = search.lower()
            query = query.filter(
                or_(
                    func.lower(Product.name).contains(needle, autoescape=True),
                    func.lower(Product.description).contains(needle, autoescape=True),
                )
            )

        total = query.count()
        products = (
            query.order_by(Product.created_at.desc(), Product.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return products, total

    def list_by_category(self, category: str, limit: int = DEFAULT_CATEGORY_LIMIT) -> list[Product]:
        """Newest products in one category."""
        return (
            self._active()
            .filter(Product.category == category)
            .order_by(Product.created_at.desc(), Product.id.desc())
            .limit(limit)
            .all()
        )

    def get_product(self, product_id: int) -> Product:
        product = self._active().filter(Product.id == product_id).first()
        if product is None:
            raise NotFoundError("Product not found")
        return product

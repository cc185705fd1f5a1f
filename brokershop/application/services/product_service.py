"""Product service - catalogue CRUD and filtered listing."""
import structlog
from fastapi import HTTPException

from ..search import SearchSyntaxError, SortingDirection, bind_criteria, parse_search
from ...infrastructure.repositories import ProductRepository, CategoryRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Service for the product catalogue.

    Responsibilities:
    - Product CRUD with category integrity
    - Translating search expressions into repository queries
    """

    # Searchable and sortable fields with their value types
    SEARCH_FIELDS = {
        "id": int,
        "name": str,
        "title": str,
        "description": str,
        "price": float,
        "quantity": int,
        "category": int,
    }

    def __init__(
        self,
        product_repository: ProductRepository,
        category_repository: CategoryRepository
    ):
        self.product_repo = product_repository
        self.category_repo = category_repository

    def list_products(self) -> list[dict]:
        return self.product_repo.list_all()

    def get_product(self, product_id: int) -> dict:
        product = self.product_repo.get_by_id(product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    def create_product(
        self,
        title: str,
        description: str,
        price: float,
        quantity: int,
        category_id: int,
        image: str | None = None
    ) -> dict:
        """Create product in an existing category.

        Raises:
            HTTPException: 400 if the category doesn't exist
        """
        self._require_category(category_id)
        product_id = self.product_repo.create(
            name=title,
            description=description,
            price=price,
            quantity=quantity,
            category_id=category_id,
            image=image
        )
        logger.info("product_created", product_id=product_id, category_id=category_id)
        return self.product_repo.get_by_id(product_id)

    def update_product(self, product_id: int, changes: dict) -> dict:
        """Apply a partial update.

        Args:
            product_id: Product ID
            changes: API field names (``title`` etc.) mapped to new values

        Raises:
            HTTPException: 404 for unknown products, 400 for unknown categories
        """
        if not self.product_repo.get_by_id(product_id):
            raise HTTPException(status_code=404, detail="Product not found")

        # Only the image may be cleared; other columns are NOT NULL
        fields = {key: value for key, value in changes.items() if value is not None or key == "image"}
        if "title" in fields:
            fields["name"] = fields.pop("title")
        if "category_id" in fields:
            self._require_category(fields["category_id"])

        self.product_repo.update(product_id, **fields)
        logger.info("product_updated", product_id=product_id, fields=sorted(fields))
        return self.product_repo.get_by_id(product_id)

    def delete_product(self, product_id: int) -> None:
        if not self.product_repo.delete(product_id):
            raise HTTPException(status_code=404, detail="Product not found")
        logger.info("product_deleted", product_id=product_id)

    def filter_products(
        self,
        search: str | None,
        order_by: str = "id",
        sorting_direction: str = "ASC"
    ) -> list[dict]:
        """List products matching a search expression.

        Args:
            search: Expression such as ``category:[1,2];price>70``
            order_by: Field to sort on
            sorting_direction: ``ASC`` or ``DESC`` (any case)

        Raises:
            HTTPException: 400 for malformed expressions or sorting options
        """
        try:
            criteria = bind_criteria(parse_search(search), self.SEARCH_FIELDS)
            direction = SortingDirection.parse(sorting_direction)
            sort_key = order_by.strip().lower()
            if sort_key not in self.SEARCH_FIELDS:
                raise SearchSyntaxError(f"Unknown sorting field '{order_by}'")
        except SearchSyntaxError as e:
            logger.info("invalid_product_search", search=search, error=str(e))
            raise HTTPException(status_code=400, detail=str(e))

        products = self.product_repo.filter(criteria, sort_key, direction)
        logger.debug(
            "products_filtered",
            criteria=len(criteria),
            order_by=sort_key,
            direction=direction.value,
            found=len(products)
        )
        return products

    def _require_category(self, category_id: int) -> None:
        if not self.category_repo.get_by_id(category_id):
            raise HTTPException(status_code=400, detail=f"Category {category_id} does not exist")

"""Product repository - catalogue storage and filtered queries."""
from .base import Repository
from ...application.search import SearchCriterion, SearchOperation, SortingDirection

_PRODUCT_SELECT = """
    SELECT p.id, p.name, p.description, p.price, p.quantity, p.image,
           p.category_id, c.name AS category_name
    FROM products p
    JOIN categories c ON p.category_id = c.id
"""

_UPDATABLE = ("name", "description", "price", "quantity", "image", "category_id")


class ProductRepository(Repository):
    """Repository for products.

    Rows carry the category name as ``category_name`` next to
    ``category_id``.

    Examples:
        >>> repo = ProductRepository(db)
        >>> product_id = repo.create("ORCL", "Oracle", 55.9, 2000, category_id=1)
        >>> repo.filter([SearchCriterion("name", SearchOperation.EQUALITY, "ORCL")])
    """

    # Search keys mapped to SQL columns. Only these ever reach SQL text.
    FILTER_COLUMNS = {
        "id": "p.id",
        "name": "p.name",
        "title": "p.name",
        "description": "p.description",
        "price": "p.price",
        "quantity": "p.quantity",
        "category": "p.category_id",
    }

    _SQL_OPERATORS = {
        SearchOperation.EQUALITY: "=",
        SearchOperation.GREATER_THAN: ">",
        SearchOperation.LESS_THAN: "<",
    }

    def get_by_id(self, product_id: int) -> dict | None:
        return self._fetchone(f"{_PRODUCT_SELECT} WHERE p.id = ?", (product_id,))

    def list_all(self) -> list[dict]:
        return self._fetchall(f"{_PRODUCT_SELECT} ORDER BY p.id")

    def create(
        self,
        name: str,
        description: str,
        price: float,
        quantity: int,
        category_id: int,
        image: str | None = None
    ) -> int:
        """Create product.

        Raises:
            sqlite3.IntegrityError: If the category doesn't exist
        """
        cursor = self._write(
            """INSERT INTO products (name, description, price, quantity, image, category_id)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (name.strip(), description, price, quantity, image, category_id)
        )
        return cursor.lastrowid

    def update(self, product_id: int, **fields) -> bool:
        """Update the given columns of a product.

        Args:
            product_id: Product ID
            **fields: Subset of name, description, price, quantity, image, category_id

        Returns:
            True if product existed
        """
        unknown = set(fields) - set(_UPDATABLE)
        if unknown:
            raise ValueError(f"Cannot update product columns: {', '.join(sorted(unknown))}")
        if not fields:
            return self.get_by_id(product_id) is not None

        assignments = ", ".join(f"{column} = ?" for column in fields)
        cursor = self._write(
            f"UPDATE products SET {assignments} WHERE id = ?",
            (*fields.values(), product_id)
        )
        return cursor.rowcount > 0

    def delete(self, product_id: int) -> bool:
        return self._write("DELETE FROM products WHERE id = ?", (product_id,)).rowcount > 0

    def filter(
        self,
        criteria: list[SearchCriterion],
        order_by: str = "id",
        direction: SortingDirection = SortingDirection.ASC
    ) -> list[dict]:
        """Return products matching every criterion.

        Args:
            criteria: Bound criteria (typed values)
            order_by: Search key to sort on
            direction: Sorting direction; ties are broken by ID ascending

        Returns:
            List of product dicts
        """
        clauses = []
        parameters = []
        for criterion in criteria:
            column = self._column(criterion.key)
            if criterion.is_list:
                placeholders = ", ".join("?" for _ in criterion.value)
                clauses.append(f"{column} IN ({placeholders})")
                parameters.extend(criterion.value)
            else:
                clauses.append(f"{column} {self._SQL_OPERATORS[criterion.operation]} ?")
                parameters.append(criterion.value)

        sql = _PRODUCT_SELECT
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)

        sort_column = self._column(order_by)
        sql += f" ORDER BY {sort_column} {SortingDirection(direction).value}"
        if sort_column != "p.id":
            sql += ", p.id ASC"

        return self._fetchall(sql, tuple(parameters))

    def _column(self, key: str) -> str:
        try:
            return self.FILTER_COLUMNS[key]
        except KeyError:
            raise ValueError(f"Unknown product field '{key}'") from None

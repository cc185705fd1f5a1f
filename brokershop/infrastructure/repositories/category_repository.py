"""Category repository."""
from .base import Repository


class CategoryRepository(Repository):
    """Repository for product categories."""

    def get_by_id(self, category_id: int) -> dict | None:
        return self._fetchone("SELECT id, name FROM categories WHERE id = ?", (category_id,))

    def get_by_name(self, name: str) -> dict | None:
        return self._fetchone("SELECT id, name FROM categories WHERE name = ?", (name,))

    def create(self, name: str) -> int:
        """Create category.

        Raises:
            sqlite3.IntegrityError: If the name is already taken
        """
        return self._write("INSERT INTO categories (name) VALUES (?)", (name.strip(),)).lastrowid

    def rename(self, category_id: int, name: str) -> bool:
        cursor = self._write(
            "UPDATE categories SET name = ? WHERE id = ?",
            (name.strip(), category_id)
        )
        return cursor.rowcount > 0

    def delete(self, category_id: int) -> bool:
        """Delete category.

        Raises:
            sqlite3.IntegrityError: If products still reference it
        """
        return self._write("DELETE FROM categories WHERE id = ?", (category_id,)).rowcount > 0

    def count_products(self, category_id: int) -> int:
        row = self._fetchone(
            "SELECT COUNT(*) AS count FROM products WHERE category_id = ?",
            (category_id,)
        )
        return row["count"]

    def list_all(self) -> list[dict]:
        return self._fetchall("SELECT id, name FROM categories ORDER BY id")

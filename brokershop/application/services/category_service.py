"""Category service."""
import sqlite3

import structlog
from fastapi import HTTPException

from ...infrastructure.repositories import CategoryRepository

logger = structlog.get_logger(__name__)


class CategoryService:
    """Service for category management."""

    def __init__(self, category_repository: CategoryRepository):
        self.category_repo = category_repository

    def list_categories(self) -> list[dict]:
        return self.category_repo.list_all()

    def create_category(self, name: str) -> dict:
        """Create category.

        Raises:
            HTTPException: 409 if the name is taken
        """
        try:
            category_id = self.category_repo.create(name)
        except sqlite3.IntegrityError:
            raise HTTPException(status_code=409, detail=f"Category '{name}' already exists")

        logger.info("category_created", category_id=category_id)
        return self.category_repo.get_by_id(category_id)

    def rename_category(self, category_id: int, name: str) -> dict:
        """Rename category.

        Raises:
            HTTPException: 404 if missing, 409 if the name is taken
        """
        try:
            renamed = self.category_repo.rename(category_id, name)
        except sqlite3.IntegrityError:
            raise HTTPException(status_code=409, detail=f"Category '{name}' already exists")

        if not renamed:
            raise HTTPException(status_code=404, detail="Category not found")
        return self.category_repo.get_by_id(category_id)

    def delete_category(self, category_id: int) -> None:
        """Delete an empty category.

        Raises:
            HTTPException: 404 if missing, 409 while products reference it
        """
        if not self.category_repo.get_by_id(category_id):
            raise HTTPException(status_code=404, detail="Category not found")

        if self.category_repo.count_products(category_id):
            raise HTTPException(status_code=409, detail="Category still has products")

        self.category_repo.delete(category_id)
        logger.info("category_deleted", category_id=category_id)

# Repository Pattern Implementation
"""
Repositories abstract database operations.
Each entity has its own repository.

Usage:
    repo = ProductRepository(db)
    products = repo.filter(criteria, "id", SortingDirection.DESC)
"""
from .base import Repository
from .role_repository import RoleRepository
from .user_repository import UserRepository
from .session_repository import SessionRepository
from .category_repository import CategoryRepository
from .product_repository import ProductRepository

__all__ = [
    "Repository",
    "RoleRepository",
    "UserRepository",
    "SessionRepository",
    "CategoryRepository",
    "ProductRepository",
]

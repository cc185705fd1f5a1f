"""Application services - business logic layer."""

from .auth_service import AuthService
from .account_service import AccountService
from .category_service import CategoryService
from .product_service import ProductService

__all__ = [
    "AuthService",
    "AccountService",
    "CategoryService",
    "ProductService",
]

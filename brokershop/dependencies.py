"""Shared FastAPI dependencies and service factories."""
from typing import Annotated, Iterator
import sqlite3

from fastapi import Path, Request, HTTPException

from .application.services import AuthService, AccountService, CategoryService, ProductService
from .config import MAX_DB_INT, ROLE_ADMIN
from .database import create_connection
from .infrastructure.repositories import (
    UserRepository, RoleRepository, SessionRepository,
    CategoryRepository, ProductRepository
)


# Row id taken from the URL path; larger values cannot name a stored row
EntityId = Annotated[int, Path(ge=1, le=MAX_DB_INT)]


def get_db() -> Iterator[sqlite3.Connection]:
    """Open a connection for the duration of one request."""
    db = create_connection()
    try:
        yield db
    finally:
        db.close()


def get_current_user(request: Request) -> dict | None:
    """Get current user from request state."""
    return getattr(request.state, "user", None)


def require_user(request: Request) -> dict:
    """Require authenticated user, raise 401 if not authenticated."""
    user = get_current_user(request)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_admin(request: Request) -> dict:
    """Require a user with the admin role. Raises 401 or 403."""
    user = require_user(request)
    if user["role"] != ROLE_ADMIN:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


# Service factory functions

def get_auth_service(db) -> AuthService:
    return AuthService(
        user_repository=UserRepository(db),
        session_repository=SessionRepository(db)
    )


def get_account_service(db) -> AccountService:
    return AccountService(
        user_repository=UserRepository(db),
        role_repository=RoleRepository(db)
    )


def get_category_service(db) -> CategoryService:
    return CategoryService(category_repository=CategoryRepository(db))


def get_product_service(db) -> ProductService:
    return ProductService(
        product_repository=ProductRepository(db),
        category_repository=CategoryRepository(db)
    )

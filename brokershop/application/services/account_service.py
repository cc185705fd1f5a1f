"""Account service - users, roles and who may manage them."""
import sqlite3

import structlog
from fastapi import HTTPException

from ...config import ROLE_ADMIN, ROLE_USER
from ...infrastructure.repositories import UserRepository, RoleRepository

logger = structlog.get_logger(__name__)


class AccountService:
    """Service for user and role administration.

    Responsibilities:
    - Registration of regular users
    - Account deletion (self or admin)
    - Role listing, creation and assignment
    """

    def __init__(
        self,
        user_repository: UserRepository,
        role_repository: RoleRepository
    ):
        self.user_repo = user_repository
        self.role_repo = role_repository

    @staticmethod
    def is_admin(actor: dict | None) -> bool:
        """Check whether the acting user holds the admin role."""
        return bool(actor) and actor.get("role") == ROLE_ADMIN

    def register(self, name: str, password: str) -> dict:
        """Create a user with the regular user role.

        Returns:
            The created user dict

        Raises:
            HTTPException: 409 if the name is taken, 500 if the role is missing
        """
        role = self.role_repo.get_by_name(ROLE_USER)
        if not role:
            raise HTTPException(status_code=500, detail=f"Role {ROLE_USER} is not configured")

        if self.user_repo.get_by_name(name):
            raise HTTPException(status_code=409, detail=f"User '{name}' already exists")

        try:
            user_id = self.user_repo.create(name, password, role["id"])
        except sqlite3.IntegrityError:
            raise HTTPException(status_code=409, detail=f"User '{name}' already exists")

        logger.info("user_registered", user_id=user_id)
        return self.user_repo.get_by_id(user_id)

    def delete_user(self, actor: dict, user_id: int) -> None:
        """Delete an account.

        A user may delete their own account; admins may delete any.
        The user's sessions go with the account.

        Raises:
            HTTPException: 403 when not permitted, 404 for unknown users
        """
        if actor["id"] != user_id and not self.is_admin(actor):
            raise HTTPException(status_code=403, detail="Not allowed to delete this user")

        if not self.user_repo.get_by_id(user_id):
            raise HTTPException(status_code=404, detail="User not found")

        self.user_repo.delete(user_id)
        logger.info("user_deleted", user_id=user_id, deleted_by=actor["id"])

    def list_users(self) -> list[dict]:
        return self.user_repo.list_all()

    def list_roles(self) -> list[dict]:
        return self.role_repo.list_all()

    def create_role(self, name: str) -> dict:
        """Create a role.

        Raises:
            HTTPException: 400 for a blank name, 409 if the name is taken
        """
        name = name.strip().upper()
        if not name:
            raise HTTPException(status_code=400, detail="Role name is required")
        try:
            role_id = self.role_repo.create(name)
        except sqlite3.IntegrityError:
            raise HTTPException(status_code=409, detail=f"Role '{name}' already exists")

        logger.info("role_created", role_id=role_id, name=name)
        return self.role_repo.get_by_id(role_id)

    def users_in_role(self, role_id: int) -> list[dict]:
        """List users granted a role.

        Raises:
            HTTPException: 404 for unknown roles
        """
        if not self.role_repo.get_by_id(role_id):
            raise HTTPException(status_code=404, detail="Role not found")
        return self.user_repo.list_by_role(role_id)

    def assign_role(self, user_id: int, role_id: int) -> dict:
        """Move a user to another role.

        Raises:
            HTTPException: 404 for unknown users or roles
        """
        if not self.role_repo.get_by_id(role_id):
            raise HTTPException(status_code=404, detail="Role not found")
        if not self.user_repo.set_role(user_id, role_id):
            raise HTTPException(status_code=404, detail="User not found")

        logger.info("role_assigned", user_id=user_id, role_id=role_id)
        return self.user_repo.get_by_id(user_id)

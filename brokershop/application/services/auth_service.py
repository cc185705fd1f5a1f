"""Authentication service - handles login/logout and session management."""
from typing import Optional, Tuple

import structlog

from ...infrastructure.repositories import UserRepository, SessionRepository

logger = structlog.get_logger(__name__)


class AuthService:
    """Service for authentication operations.

    Responsibilities:
    - Credential checks
    - Session creation and lookup
    - Logout
    """

    def __init__(
        self,
        user_repository: UserRepository,
        session_repository: SessionRepository
    ):
        self.user_repo = user_repository
        self.session_repo = session_repository

    def sign_in(
        self,
        username: str,
        password: str,
        expires_hours: int = 24 * 7
    ) -> Optional[Tuple[dict, str]]:
        """Check credentials and open a session.

        Args:
            username: Username from the login form
            password: Password from the login form
            expires_hours: Session lifetime

        Returns:
            (user dict, session ID) on success, None on bad credentials
        """
        user = self.user_repo.authenticate(username, password)
        if not user:
            logger.info("sign_in_failed", username=username)
            return None

        session_id = self.session_repo.create(user["id"], expires_hours)
        logger.info("user_signed_in", user_id=user["id"], role=user["role_name"])
        return user, session_id

    def get_session(self, session_id: str) -> Optional[dict]:
        """Resolve a session cookie to the signed-in user.

        Returns:
            Dict with ``user_id``, ``name``, ``role_id`` and ``role_name``,
            or None for unknown and expired sessions
        """
        return self.session_repo.get_principal(session_id)

    def sign_out(self, session_id: str) -> bool:
        """Delete session (logout).

        Returns:
            True if a session was deleted
        """
        deleted = self.session_repo.delete(session_id)
        if deleted:
            logger.info("user_signed_out")
        return deleted

    def cleanup_expired_sessions(self) -> int:
        removed = self.session_repo.purge_expired()
        if removed:
            logger.info("expired_sessions_removed", count=removed)
        return removed

"""Session repository - login tokens behind the shop_session cookie."""
import secrets

from .base import Repository


class SessionRepository(Repository):
    """Login sessions.

    A session row only holds the token, its user and an expiry computed
    by SQLite. Sessions go away with their user (ON DELETE CASCADE).
    """

    def create(self, user_id: int, expires_hours: int) -> str:
        """Open a session and return its token."""
        token = secrets.token_urlsafe(32)
        self._write(
            """INSERT INTO sessions (id, user_id, expires_at)
               VALUES (?, ?, datetime('now', ? || ' hours'))""",
            (token, user_id, f"+{expires_hours}")
        )
        return token

    def get_principal(self, token: str) -> dict | None:
        """Resolve an unexpired token to the signed-in user.

        Returns:
            Dict with ``user_id``, ``name``, ``role_id`` and ``role_name``,
            or None for unknown and expired tokens
        """
        return self._fetchone(
            """SELECT s.user_id, u.name, u.role_id, r.name AS role_name
               FROM sessions s
               JOIN users u ON u.id = s.user_id
               JOIN roles r ON r.id = u.role_id
               WHERE s.id = ? AND s.expires_at > datetime('now')""",
            (token,)
        )

    def delete(self, token: str) -> bool:
        return self._write("DELETE FROM sessions WHERE id = ?", (token,)).rowcount > 0

    def purge_expired(self) -> int:
        return self._write(
            "DELETE FROM sessions WHERE expires_at <= datetime('now')"
        ).rowcount

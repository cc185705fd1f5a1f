"""User repository - handles all user-related database operations."""
import bcrypt

from .base import Repository
from ...config import MAX_PASSWORD_BYTES

_USER_SELECT = """
    SELECT u.id, u.name, u.password_hash, u.role_id, u.created_at,
           r.name AS role_name
    FROM users u
    JOIN roles r ON u.role_id = r.id
"""


class UserRepository(Repository):
    """Repository for user entity operations.

    Every user row is returned joined with its role, so callers get
    ``role_id`` and ``role_name`` alongside the user's own columns.
    Names are stored lower-cased.

    Examples:
        >>> repo = UserRepository(db)
        >>> user_id = repo.create("john", "password123", role_id=2)
        >>> repo.get_by_id(user_id)["role_name"]
        'ROLE_USER'
    """

    def get_by_id(self, user_id: int) -> dict | None:
        return self._fetchone(f"{_USER_SELECT} WHERE u.id = ?", (user_id,))

    def get_by_name(self, name: str) -> dict | None:
        """Get user by name (case-insensitive)."""
        return self._fetchone(f"{_USER_SELECT} WHERE u.name = ?", (name.lower().strip(),))

    def create(self, name: str, password: str, role_id: int) -> int:
        """Create new user.

        Args:
            name: Unique username
            password: Plain text password (will be hashed)
            role_id: Role granted to the user

        Returns:
            New user ID

        Raises:
            ValueError: If the password is longer than bcrypt accepts
            sqlite3.IntegrityError: If the name is taken or the role is missing
        """
        cursor = self._write(
            "INSERT INTO users (name, password_hash, role_id) VALUES (?, ?, ?)",
            (name.lower().strip(), self._hash_password(password), role_id)
        )
        return cursor.lastrowid

    def update_password(self, user_id: int, new_password: str) -> bool:
        cursor = self._write(
            "UPDATE users SET password_hash = ? WHERE id = ?",
            (self._hash_password(new_password), user_id)
        )
        return cursor.rowcount > 0

    def set_role(self, user_id: int, role_id: int) -> bool:
        cursor = self._write("UPDATE users SET role_id = ? WHERE id = ?", (role_id, user_id))
        return cursor.rowcount > 0

    def delete(self, user_id: int) -> bool:
        """Delete user. Their sessions are removed by the cascade."""
        return self._write("DELETE FROM users WHERE id = ?", (user_id,)).rowcount > 0

    def list_all(self) -> list[dict]:
        return self._fetchall(f"{_USER_SELECT} ORDER BY u.id")

    def list_by_role(self, role_id: int) -> list[dict]:
        return self._fetchall(f"{_USER_SELECT} WHERE u.role_id = ? ORDER BY u.id", (role_id,))

    def authenticate(self, name: str, password: str) -> dict | None:
        """Authenticate user with name and password.

        A password bcrypt could never have hashed is a failed login.

        Returns:
            User dict if authentication successful, None otherwise
        """
        if not name or not password or not password_fits(password):
            return None

        user = self.get_by_name(name)
        if not user:
            return None

        if self._verify_password(password, user["password_hash"]):
            return user
        return None

    # Private helper methods

    def _hash_password(self, password: str) -> str:
        if not password_fits(password):
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())
        return hashed.decode('utf-8')

    def _verify_password(self, password: str, hashed: str) -> bool:
        return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))


def password_fits(password: str) -> bool:
    """Check that a password is within bcrypt's input limit."""
    return len(password.encode('utf-8')) <= MAX_PASSWORD_BYTES

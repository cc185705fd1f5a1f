"""Role repository - authorities that users are granted."""
from .base import Repository


class RoleRepository(Repository):
    """Repository for role records.

    Examples:
        >>> repo = RoleRepository(db)
        >>> role_id = repo.create("ROLE_ADMIN")
        >>> repo.get_by_name("ROLE_ADMIN")["id"] == role_id
        True
    """

    def get_by_id(self, role_id: int) -> dict | None:
        return self._fetchone("SELECT id, name FROM roles WHERE id = ?", (role_id,))

    def get_by_name(self, name: str) -> dict | None:
        return self._fetchone("SELECT id, name FROM roles WHERE name = ?", (name,))

    def create(self, name: str) -> int:
        """Create role.

        Raises:
            sqlite3.IntegrityError: If the name is already taken
        """
        return self._write("INSERT INTO roles (name) VALUES (?)", (name,)).lastrowid

    def list_all(self) -> list[dict]:
        return self._fetchall("SELECT id, name FROM roles ORDER BY id")

"""Base class for the SQLite repositories."""
import sqlite3


class Repository:
    """Query helpers over one ``sqlite3.Connection``.

    Rows come back as plain dicts. Writes go through ``_write``, which
    commits straight away; there are no multi-statement transactions in
    the shop.
    """

    def __init__(self, db: sqlite3.Connection):
        self._conn = db

    def _execute(self, sql: str, parameters: tuple = ()) -> sqlite3.Cursor:
        return self._conn.execute(sql, parameters)

    def _fetchone(self, sql: str, parameters: tuple = ()) -> dict | None:
        row = self._execute(sql, parameters).fetchone()
        return dict(row) if row else None

    def _fetchall(self, sql: str, parameters: tuple = ()) -> list[dict]:
        return [dict(row) for row in self._execute(sql, parameters).fetchall()]

    def _write(self, sql: str, parameters: tuple = ()) -> sqlite3.Cursor:
        """Run an INSERT/UPDATE/DELETE and commit it.

        Returns:
            The cursor, for ``lastrowid`` and ``rowcount``
        """
        cursor = self._execute(sql, parameters)
        self._conn.commit()
        return cursor

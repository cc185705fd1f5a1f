"""SQLite connection handling and schema."""
import sqlite3

from .config import DATABASE_PATH, ROLE_ADMIN, ROLE_USER


def create_connection() -> sqlite3.Connection:
    """Open a new connection to the shop database.

    FastAPI may run a dependency and its endpoint on different pool
    threads, so the connection is not pinned to its creating thread.
    """
    db = sqlite3.connect(DATABASE_PATH, check_same_thread=False)
    db.row_factory = sqlite3.Row
    db.execute("PRAGMA foreign_keys = ON")
    return db


def init_db(db: sqlite3.Connection | None = None):
    """Create tables and indexes if they don't exist."""
    own = db is None
    if own:
        db = create_connection()

    try:
        db.execute("""
            CREATE TABLE IF NOT EXISTS roles (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE
            )
        """)

        db.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE,
                password_hash TEXT NOT NULL,
                role_id INTEGER NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (role_id) REFERENCES roles(id)
            )
        """)

        db.execute("""
            CREATE TABLE IF NOT EXISTS sessions (
                id TEXT PRIMARY KEY,
                user_id INTEGER NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                expires_at TIMESTAMP NOT NULL,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        db.execute("""
            CREATE TABLE IF NOT EXISTS categories (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE
            )
        """)

        db.execute("""
            CREATE TABLE IF NOT EXISTS products (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                description TEXT NOT NULL DEFAULT '',
                price REAL NOT NULL CHECK(price > 0),
                quantity INTEGER NOT NULL DEFAULT 0 CHECK(quantity >= 0),
                image TEXT,
                category_id INTEGER NOT NULL,
                FOREIGN KEY (category_id) REFERENCES categories(id)
            )
        """)

        db.execute("CREATE INDEX IF NOT EXISTS idx_users_role_id ON users(role_id)")
        db.execute("CREATE INDEX IF NOT EXISTS idx_sessions_user_id ON sessions(user_id)")
        db.execute("CREATE INDEX IF NOT EXISTS idx_products_category_id ON products(category_id)")
        db.execute("CREATE INDEX IF NOT EXISTS idx_products_name ON products(name)")

        # Built-in roles
        db.executemany(
            "INSERT OR IGNORE INTO roles (name) VALUES (?)",
            [(ROLE_ADMIN,), (ROLE_USER,)]
        )

        db.commit()
    finally:
        if own:
            db.close()

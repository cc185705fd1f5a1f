"""Application configuration and constants."""
import os
from pathlib import Path

# Directory paths
BASE_DIR = Path(__file__).resolve().parent.parent

# Database location (override with SHOP_DATABASE_PATH)
DATABASE_PATH = Path(os.environ.get("SHOP_DATABASE_PATH", str(BASE_DIR / "brokershop.db")))

# Session configuration
SESSION_COOKIE = "shop_session"
SESSION_HOURS = int(os.environ.get("SHOP_SESSION_HOURS", str(24 * 7)))
SESSION_MAX_AGE = SESSION_HOURS * 60 * 60
COOKIE_SECURE = os.environ.get("SHOP_COOKIE_SECURE", "false").lower() in ("1", "true", "yes")

# Roles
ROLE_ADMIN = "ROLE_ADMIN"
ROLE_USER = "ROLE_USER"

# Auth redirect targets
AUTH_ERROR_URL = "/api/auth/user/onerror"
SIGNED_OUT_URL = "/api/auth/user/signedout"

# Seed demo catalogue and accounts on startup
SEED_DEMO = os.environ.get("SHOP_SEED_DEMO", "false").lower() in ("1", "true", "yes")

# Logging
LOG_LEVEL = os.environ.get("SHOP_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.environ.get("SHOP_LOG_FORMAT", "console")  # console or json

# Response envelope statuses
SUCCESS_STATUS = "success"
FAIL_STATUS = "fail"

# Storage limits: bcrypt hashes at most 72 bytes, SQLite integers are signed 64-bit
MAX_PASSWORD_BYTES = 72
MAX_DB_INT = 2 ** 63 - 1

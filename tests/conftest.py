"""Test environment: in-memory SQLite, cheap bcrypt, fixed JWT secret, no SMTP or Redis.

Set before any app module is imported, since settings are read at import time.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-do-not-use-in-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("APP_ENV", "dev")
os.environ["SMTP_USER"] = ""
os.environ.pop("SMTP_PASS", None)
os.environ["REDIS_URL"] = ""

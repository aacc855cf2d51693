"""Password hashing and verification (bcrypt)."""

from functools import lru_cache

import bcrypt

from app.core.config import settings

# Min/max lengths for password validation (input validation on every entry point).
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 100


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    cost = rounds if rounds is not None else settings.BCRYPT_ROUNDS
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache
def _dummy_hash(rounds: int) -> str:
    return hash_password("portfolio-dummy-password", rounds=rounds)


def burn_password_check(plain_password: str) -> None:
    """
    Verify against a throwaway hash of the configured cost.

    Used when the email is unknown so login timing does not reveal whether an account exists.
    """
    verify_password(plain_password, _dummy_hash(settings.BCRYPT_ROUNDS))

"""User accounts: registration, cached profile lookup, and admin user management."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.models.user import ROLES, User
from app.services.cache import ProfileCache, profile_cache_key
from app.services.credential_store import CredentialStore, UserRecord
from app.services.email_service import EmailDeliveryError, EmailSender, build_welcome_email
from app.services.errors import ConflictError, NotFoundError, ServiceError

logger = logging.getLogger(__name__)


def register_user(store: CredentialStore, *, name: str, email: str, password: str) -> UserRecord:
    """Create a USER account. Raises ConflictError if the email is taken."""
    if store.get_by_email(email) is not None:
        raise ConflictError("User with this email already exists")
    user = store.create_user(name=name, email=email, password_hash=hash_password(password))
    logger.info("User registered", extra={"user_id": user.id})
    return user


def send_welcome_email(mailer: EmailSender, user: UserRecord) -> None:
    """Background task: a failed welcome email is logged, never surfaced."""
    try:
        mailer.send(build_welcome_email(user.email, user.name))
    except EmailDeliveryError:
        logger.exception("Failed to send welcome email", extra={"user_id": user.id})


def get_profile(
    store: CredentialStore, cache: ProfileCache, user_id: str, ttl_seconds: int
) -> tuple[dict[str, Any], bool]:
    """
    Return (public user fields, cache_hit).

    Raises NotFoundError if the user no longer exists.
    """
    key = profile_cache_key(user_id)
    cached = cache.get(key)
    if cached is not None:
        return cached, True
    user = store.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    data = user.public_fields()
    cache.set(key, data, ttl_seconds)
    return data, False


# --------------------------------------------------------------------------- #
# Admin user management
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class UserPage:
    users: list[User]
    total: int
    page: int
    total_pages: int


def list_users(db: Session, *, page: int = 1, limit: int = 10, search: str | None = None) -> UserPage:
    """Active users, newest first; search matches name or email case-insensitively."""
    page = max(page, 1)
    limit = max(1, min(limit, 100))
    stmt = select(User).where(User.deleted_at.is_(None))
    if search:
        pattern = f"%{search.lower()}%"
        stmt = stmt.where(
            or_(func.lower(User.name).like(pattern), func.lower(User.email).like(pattern))
        )
    total = db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
    users = list(
        db.execute(
            stmt.order_by(User.created_at.desc()).offset((page - 1) * limit).limit(limit)
        ).scalars()
    )
    return UserPage(users=users, total=total, page=page, total_pages=math.ceil(total / limit))


def get_active_user(db: Session, user_id: str) -> User:
    user = db.execute(
        select(User).where(User.id == user_id, User.deleted_at.is_(None))
    ).scalar_one_or_none()
    if user is None:
        raise NotFoundError("User not found")
    return user


def update_user_role(
    db: Session, user_id: str, role: str, cache: ProfileCache | None = None
) -> User:
    if role not in ROLES:
        raise ServiceError("Invalid role provided")
    user = get_active_user(db, user_id)
    user.role = role
    db.commit()
    db.refresh(user)
    if cache is not None:
        cache.delete(profile_cache_key(user_id))
    logger.info("User role updated", extra={"user_id": user_id, "role": role})
    return user


def soft_delete_user(
    db: Session, user_id: str, *, acting_user_id: str, cache: ProfileCache | None = None
) -> None:
    """Mark the user deleted and drop its session. Admins cannot delete themselves."""
    if user_id == acting_user_id:
        raise ServiceError("You cannot delete your own account")
    user = get_active_user(db, user_id)
    user.deleted_at = datetime.now(UTC)
    user.refresh_token_hash = None
    user.refresh_token_expiry = None
    db.commit()
    if cache is not None:
        cache.delete(profile_cache_key(user_id))
    logger.info("User soft-deleted", extra={"user_id": user_id})

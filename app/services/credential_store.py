"""Credential persistence: user lookup and atomic writes of password and token digests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.user import ROLE_USER, User
from app.services.errors import ConflictError


@dataclass(frozen=True)
class UserRecord:
    """Snapshot of a user row, detached from the ORM session."""

    id: str
    name: str
    email: str
    role: str
    password_hash: str
    avatar: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, user: User) -> UserRecord:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            password_hash=user.password_hash,
            avatar=user.avatar,
            created_at=user.created_at,
        )

    def public_fields(self) -> dict[str, object]:
        """Non-sensitive fields safe to return to clients or cache."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "avatar": self.avatar,
            "created_at": self.created_at,
        }


class CredentialStore(Protocol):
    """
    Persistence used by the session and password-reset services.

    Lookups ignore soft-deleted users. Every method that writes a digest writes its
    expiry in the same statement; the compare-and-set methods return False when the
    expected digest is no longer current.
    """

    def create_user(
        self, *, name: str, email: str, password_hash: str, role: str = ROLE_USER
    ) -> UserRecord: ...

    def get_by_id(self, user_id: str) -> UserRecord | None: ...

    def get_by_email(self, email: str) -> UserRecord | None: ...

    def get_by_refresh_digest(self, token_digest: str, now: datetime) -> UserRecord | None: ...

    def get_by_reset_digest(self, token_digest: str, now: datetime) -> UserRecord | None: ...

    def store_refresh_token(self, user_id: str, token_digest: str, expires_at: datetime) -> None: ...

    def rotate_refresh_token(
        self,
        user_id: str,
        *,
        old_digest: str,
        new_digest: str,
        expires_at: datetime,
        now: datetime,
    ) -> bool: ...

    def clear_refresh_token(self, user_id: str) -> None: ...

    def store_reset_token(self, user_id: str, token_digest: str, expires_at: datetime) -> None: ...

    def clear_reset_token(self, user_id: str) -> None: ...

    def consume_reset_token(
        self, user_id: str, *, token_digest: str, password_hash: str, now: datetime
    ) -> bool: ...


class SqlAlchemyCredentialStore:
    """CredentialStore backed by the users table. Each write commits on its own."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _active(self):
        return select(User).where(User.deleted_at.is_(None))

    def _first(self, stmt) -> UserRecord | None:
        user = self.db.execute(stmt).scalars().first()
        return UserRecord.from_model(user) if user is not None else None

    def _update(self, user_id: str, *conditions, **values) -> bool:
        result = self.db.execute(
            update(User)
            .where(User.id == user_id, *conditions)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount == 1

    def create_user(
        self, *, name: str, email: str, password_hash: str, role: str = ROLE_USER
    ) -> UserRecord:
        user = User(name=name, email=email, password_hash=password_hash, role=role)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("User with this email already exists") from e
        self.db.refresh(user)
        return UserRecord.from_model(user)

    def get_by_id(self, user_id: str) -> UserRecord | None:
        return self._first(self._active().where(User.id == user_id))

    def get_by_email(self, email: str) -> UserRecord | None:
        return self._first(self._active().where(User.email == email))

    def get_by_refresh_digest(self, token_digest: str, now: datetime) -> UserRecord | None:
        return self._first(
            self._active().where(
                User.refresh_token_hash == token_digest,
                User.refresh_token_expiry > now,
            )
        )

    def get_by_reset_digest(self, token_digest: str, now: datetime) -> UserRecord | None:
        return self._first(
            self._active().where(
                User.reset_token_hash == token_digest,
                User.reset_token_expiry > now,
            )
        )

    def store_refresh_token(self, user_id: str, token_digest: str, expires_at: datetime) -> None:
        self._update(user_id, refresh_token_hash=token_digest, refresh_token_expiry=expires_at)

    def rotate_refresh_token(
        self,
        user_id: str,
        *,
        old_digest: str,
        new_digest: str,
        expires_at: datetime,
        now: datetime,
    ) -> bool:
        return self._update(
            user_id,
            User.refresh_token_hash == old_digest,
            User.refresh_token_expiry > now,
            refresh_token_hash=new_digest,
            refresh_token_expiry=expires_at,
        )

    def clear_refresh_token(self, user_id: str) -> None:
        self._update(user_id, refresh_token_hash=None, refresh_token_expiry=None)

    def store_reset_token(self, user_id: str, token_digest: str, expires_at: datetime) -> None:
        self._update(user_id, reset_token_hash=token_digest, reset_token_expiry=expires_at)

    def clear_reset_token(self, user_id: str) -> None:
        self._update(user_id, reset_token_hash=None, reset_token_expiry=None)

    def consume_reset_token(
        self, user_id: str, *, token_digest: str, password_hash: str, now: datetime
    ) -> bool:
        # Password change, reset-token clear and session revocation land together.
        return self._update(
            user_id,
            User.reset_token_hash == token_digest,
            User.reset_token_expiry > now,
            password_hash=password_hash,
            reset_token_hash=None,
            reset_token_expiry=None,
            refresh_token_hash=None,
            refresh_token_expiry=None,
        )

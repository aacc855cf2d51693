"""Session lifecycle: login, refresh-token rotation, logout."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from app.core.security import burn_password_check, verify_password
from app.services.cache import NullProfileCache, ProfileCache, profile_cache_key
from app.services.credential_store import CredentialStore, UserRecord
from app.services.errors import InvalidCredentialsError, TokenInvalidError, UnauthorizedError
from app.services.token_codec import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    TokenClaims,
    TokenCodec,
    digest,
    utc_now,
)

logger = logging.getLogger(__name__)

EXPIRED_SESSION_MESSAGE = "Invalid or expired token. Please login again."


@dataclass(frozen=True)
class SessionResult:
    """Token pair plus the user it was issued for."""

    access_token: str
    refresh_token: str
    user: UserRecord


class SessionService:
    """
    Issue and rotate token pairs.

    The store keeps the digest of the one refresh token currently valid for each user.
    Signature checks prove a token is authentic; the digest match proves it is the
    current one, so a rotated-out token fails even before it expires.
    """

    def __init__(
        self,
        store: CredentialStore,
        codec: TokenCodec,
        *,
        cache: ProfileCache | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.codec = codec
        self.cache = cache or NullProfileCache()
        self._clock = clock

    def login(self, email: str, password: str) -> SessionResult:
        """
        Authenticate credentials and issue a fresh token pair.

        Unknown email and wrong password raise the same InvalidCredentialsError.
        """
        user = self.store.get_by_email(email)
        if user is None:
            burn_password_check(password)
            logger.info("Login failed", extra={"reason": "credentials"})
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            logger.info("Login failed", extra={"reason": "credentials", "user_id": user.id})
            raise InvalidCredentialsError()

        access, refresh = self._mint_pair(user)
        # Overwrites any previous refresh digest: older refresh tokens stop working here.
        self.store.store_refresh_token(user.id, digest(refresh), self.codec.refresh_expiry())
        logger.info("Login succeeded", extra={"user_id": user.id})
        return SessionResult(access_token=access, refresh_token=refresh, user=user)

    def refresh(self, refresh_token: str) -> SessionResult:
        """
        Exchange the current refresh token for a new pair (rotation).

        Raises TokenInvalidError when the token is forged, expired, not a refresh token,
        not the stored one, or lost a concurrent rotation.
        """
        claims = self.codec.verify(refresh_token, REFRESH_TOKEN_TYPE)
        old_digest = digest(refresh_token)
        now = self._clock()

        user = self.store.get_by_refresh_digest(old_digest, now)
        if user is None or user.id != claims.id:
            logger.info("Refresh rejected", extra={"user_id": claims.id})
            raise TokenInvalidError()

        access, refresh = self._mint_pair(user)
        rotated = self.store.rotate_refresh_token(
            user.id,
            old_digest=old_digest,
            new_digest=digest(refresh),
            expires_at=self.codec.refresh_expiry(),
            now=now,
        )
        if not rotated:
            # Another request rotated this token between our read and our write.
            logger.info("Refresh lost rotation race", extra={"user_id": user.id})
            raise TokenInvalidError()

        self.cache.delete(profile_cache_key(user.id))
        logger.info("Refresh token rotated", extra={"user_id": user.id})
        return SessionResult(access_token=access, refresh_token=refresh, user=user)

    def authenticate(self, access_token: str | None) -> UserRecord:
        """Resolve an access token to its active user. Raises UnauthorizedError."""
        if not access_token:
            raise UnauthorizedError()
        try:
            claims = self.codec.verify(access_token, ACCESS_TOKEN_TYPE)
        except TokenInvalidError as e:
            raise UnauthorizedError(EXPIRED_SESSION_MESSAGE) from e
        user = self.store.get_by_id(claims.id)
        if user is None:
            logger.info("Token for missing or deleted user", extra={"user_id": claims.id})
            raise UnauthorizedError(EXPIRED_SESSION_MESSAGE)
        return user

    def logout(self, user_id: str) -> None:
        self.store.clear_refresh_token(user_id)
        self.cache.delete(profile_cache_key(user_id))
        logger.info("Logout", extra={"user_id": user_id})

    def _mint_pair(self, user: UserRecord) -> tuple[str, str]:
        claims = TokenClaims(id=user.id, email=user.email, role=user.role)
        return self.codec.mint_access_token(claims), self.codec.mint_refresh_token(claims)

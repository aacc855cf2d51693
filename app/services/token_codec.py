"""Signed access/refresh tokens (JWT) and one-way token digests for storage."""

import hashlib
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Literal

import jwt

from app.core.config import Settings
from app.services.errors import TokenInvalidError

TokenType = Literal["access", "refresh"]

ACCESS_TOKEN_TYPE: TokenType = "access"
REFRESH_TOKEN_TYPE: TokenType = "refresh"

RESET_TOKEN_BYTES = 32


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried inside access and refresh tokens."""

    id: str
    email: str
    role: str


def utc_now() -> datetime:
    return datetime.now(UTC)


def digest(token: str) -> str:
    """SHA-256 hex digest of a raw token; what gets persisted instead of the token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def generate_reset_token() -> str:
    """High-entropy random token for password reset links (hex, 64 chars)."""
    return secrets.token_hex(RESET_TOKEN_BYTES)


class TokenCodec:
    """
    Mint and verify signed, time-bounded tokens.

    Stateless: every token carries its own claims and expiry. The injected clock is the
    only notion of now, for minting and for expiry checks alike. Each token also gets a
    random jti so two tokens minted in the same second for the same user differ, which
    keeps rotation meaningful when digests are compared.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must be non-empty")
        self._secret = secret
        self._algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            access_ttl=settings.ACCESS_TOKEN_EXPIRY,
            refresh_ttl=settings.REFRESH_TOKEN_EXPIRY,
        )

    def mint_access_token(self, claims: TokenClaims) -> str:
        return self._mint(claims, ACCESS_TOKEN_TYPE, self.access_ttl)

    def mint_refresh_token(self, claims: TokenClaims) -> str:
        return self._mint(claims, REFRESH_TOKEN_TYPE, self.refresh_ttl)

    def refresh_expiry(self) -> datetime:
        """Expiry to persist next to the digest of a refresh token minted now."""
        return self._clock() + self.refresh_ttl

    def _mint(self, claims: TokenClaims, token_type: TokenType, ttl: timedelta) -> str:
        now = self._clock()
        payload: dict[str, Any] = {
            "id": claims.id,
            "email": claims.email,
            "role": claims.role,
            "type": token_type,
            "jti": secrets.token_hex(16),
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str, token_type: TokenType | None = None) -> TokenClaims:
        """
        Decode and validate a token; return its identity claims.

        Raises TokenInvalidError for a bad signature, malformed token, expiry,
        missing claims, or (when token_type is given) a token of the other kind.
        """
        if not token:
            raise TokenInvalidError()
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"], "verify_exp": False, "verify_iat": False},
            )
        except jwt.PyJWTError as e:
            raise TokenInvalidError() from e
        # Expiry is judged by the same clock that minted the token.
        exp = payload.get("exp")
        if not isinstance(exp, (int, float)) or exp <= self._clock().timestamp():
            raise TokenInvalidError()

        if token_type is not None and payload.get("type") != token_type:
            raise TokenInvalidError()
        user_id, email, role = payload.get("id"), payload.get("email"), payload.get("role")
        if not isinstance(user_id, str) or not user_id:
            raise TokenInvalidError()
        if not isinstance(email, str) or not isinstance(role, str):
            raise TokenInvalidError()
        return TokenClaims(id=user_id, email=email, role=role)

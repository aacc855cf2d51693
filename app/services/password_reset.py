"""Password reset lifecycle: email a single-use, one-hour token; consume it to set a new password."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from app.core.security import hash_password
from app.services.cache import NullProfileCache, ProfileCache, profile_cache_key
from app.services.credential_store import CredentialStore
from app.services.email_service import (
    EmailDeliveryError,
    EmailSender,
    build_password_reset_email,
    build_reset_url,
)
from app.services.errors import DeliveryFailureError, TokenInvalidError
from app.services.token_codec import digest, generate_reset_token, utc_now

logger = logging.getLogger(__name__)

RESET_TOKEN_TTL = timedelta(hours=1)


class PasswordResetService:
    """Forgot-password and reset-password flows."""

    def __init__(
        self,
        store: CredentialStore,
        mailer: EmailSender,
        *,
        frontend_url: str,
        cache: ProfileCache | None = None,
        clock: Callable[[], datetime] = utc_now,
        token_factory: Callable[[], str] = generate_reset_token,
    ) -> None:
        self.store = store
        self.mailer = mailer
        self.frontend_url = frontend_url
        self.cache = cache or NullProfileCache()
        self._clock = clock
        self._token_factory = token_factory

    def request_reset(self, email: str) -> None:
        """
        Email a reset link if the account exists; return silently if it does not.

        Only the digest is stored. If delivery fails the stored token is cleared
        and DeliveryFailureError is raised.
        """
        user = self.store.get_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown account")
            return

        token = self._token_factory()
        self.store.store_reset_token(user.id, digest(token), self._clock() + RESET_TOKEN_TTL)

        message = build_password_reset_email(
            user.email,
            user.name,
            build_reset_url(self.frontend_url, token),
            expires_minutes=int(RESET_TOKEN_TTL.total_seconds() // 60),
        )
        try:
            self.mailer.send(message)
        except EmailDeliveryError as e:
            self.store.clear_reset_token(user.id)
            logger.warning("Password reset email failed", extra={"user_id": user.id})
            raise DeliveryFailureError(
                "Failed to send password reset email. Please try again later."
            ) from e
        logger.info("Password reset email sent", extra={"user_id": user.id})

    def reset_password(self, token: str, new_password: str) -> None:
        """
        Set a new password using a valid reset token; the token is consumed.

        Raises TokenInvalidError for unknown, expired or already-used tokens.
        """
        token_digest = digest(token)
        now = self._clock()
        user = self.store.get_by_reset_digest(token_digest, now)
        if user is None:
            raise TokenInvalidError("Invalid or expired reset token.")

        consumed = self.store.consume_reset_token(
            user.id,
            token_digest=token_digest,
            password_hash=hash_password(new_password),
            now=now,
        )
        if not consumed:
            raise TokenInvalidError("Invalid or expired reset token.")
        self.cache.delete(profile_cache_key(user.id))
        logger.info("Password reset completed", extra={"user_id": user.id})

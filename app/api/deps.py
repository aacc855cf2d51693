"""FastAPI dependency providers: settings-derived collaborators and the lifecycle services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.cookies import CookiePolicy, cookie_policy_from_settings
from app.core.database import get_db
from app.services.cache import ProfileCache, build_profile_cache
from app.services.credential_store import CredentialStore, SqlAlchemyCredentialStore
from app.services.email_service import EmailSender, build_email_sender
from app.services.password_reset import PasswordResetService
from app.services.session import SessionService
from app.services.token_codec import TokenCodec


@lru_cache
def get_profile_cache() -> ProfileCache:
    """One cache client per process."""
    return build_profile_cache(get_settings())


@lru_cache
def get_email_sender() -> EmailSender:
    return build_email_sender(get_settings())


def get_token_codec(settings: Annotated[Settings, Depends(get_settings)]) -> TokenCodec:
    return TokenCodec.from_settings(settings)


def get_cookie_policy(settings: Annotated[Settings, Depends(get_settings)]) -> CookiePolicy:
    return cookie_policy_from_settings(settings)


def get_credential_store(db: Annotated[Session, Depends(get_db)]) -> CredentialStore:
    return SqlAlchemyCredentialStore(db)


def get_session_service(
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    cache: Annotated[ProfileCache, Depends(get_profile_cache)],
) -> SessionService:
    return SessionService(store, codec, cache=cache)


def get_password_reset_service(
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    mailer: Annotated[EmailSender, Depends(get_email_sender)],
    cache: Annotated[ProfileCache, Depends(get_profile_cache)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> PasswordResetService:
    return PasswordResetService(
        store, mailer, frontend_url=settings.FRONTEND_URL, cache=cache
    )

"""Account endpoints: register, login, profile, logout, refresh, forgot/reset password."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response, status

from app.api.deps import (
    get_cookie_policy,
    get_credential_store,
    get_email_sender,
    get_password_reset_service,
    get_profile_cache,
    get_session_service,
)
from app.api.v1.auth import get_current_user
from app.core.config import Settings, get_settings
from app.core.cookies import CookiePolicy, clear_access_cookie, set_access_cookie
from app.schemas.auth import (
    CurrentUser,
    ForgotPasswordRequest,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    ResetPasswordRequest,
    SessionOut,
    SessionResponse,
    TokenPairOut,
    TokenPairResponse,
    UserOut,
    UserResponse,
)
from app.schemas.common import MessageResponse
from app.services import users as user_service
from app.services.cache import ProfileCache
from app.services.credential_store import CredentialStore
from app.services.email_service import EmailSender
from app.services.errors import (
    ConflictError,
    DeliveryFailureError,
    InvalidCredentialsError,
    NotFoundError,
    TokenInvalidError,
)
from app.services.password_reset import PasswordResetService
from app.services.session import SessionService

router = APIRouter()

FORGOT_PASSWORD_MESSAGE = (
    "If an account with that email exists, a password reset link has been sent."
)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    background_tasks: BackgroundTasks,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    mailer: Annotated[EmailSender, Depends(get_email_sender)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserResponse:
    """Create a USER account and send a welcome email in the background."""
    if not settings.REGISTRATION_ENABLED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Registration is disabled."
        )
    try:
        user = user_service.register_user(
            store, name=body.name, email=body.email, password=body.password
        )
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e

    background_tasks.add_task(user_service.send_welcome_email, mailer, user)
    return UserResponse(
        message="User registered successfully",
        data=UserOut.model_validate(user.public_fields()),
    )


@router.post("/login", response_model=SessionResponse)
def login(
    body: LoginRequest,
    response: Response,
    sessions: Annotated[SessionService, Depends(get_session_service)],
    policy: Annotated[CookiePolicy, Depends(get_cookie_policy)],
) -> SessionResponse:
    """
    Authenticate with email and password.

    Sets the access-token cookie and also returns both tokens in the body.
    """
    try:
        result = sessions.login(body.email, body.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message) from e

    set_access_cookie(response, result.access_token, policy)
    return SessionResponse(
        message="Login successful",
        data=SessionOut(
            **result.user.public_fields(),
            access_token=result.access_token,
            refresh_token=result.refresh_token,
        ),
    )


@router.get("/profile", response_model=UserResponse)
def get_profile(
    response: Response,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    cache: Annotated[ProfileCache, Depends(get_profile_cache)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserResponse:
    """Current user's non-sensitive fields; X-Cache reports whether the cache answered."""
    try:
        data, hit = user_service.get_profile(
            store, cache, current_user.id, settings.PROFILE_CACHE_TTL_SEC
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e

    response.headers["X-Cache"] = "HIT" if hit else "MISS"
    return UserResponse(
        message="User profile fetched successfully",
        data=UserOut.model_validate(data),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
    policy: Annotated[CookiePolicy, Depends(get_cookie_policy)],
) -> MessageResponse:
    sessions.logout(current_user.id)
    clear_access_cookie(response, policy)
    return MessageResponse(message="Logout successful")


@router.post("/refresh-token", response_model=TokenPairResponse)
def refresh_token(
    body: RefreshTokenRequest,
    response: Response,
    sessions: Annotated[SessionService, Depends(get_session_service)],
    policy: Annotated[CookiePolicy, Depends(get_cookie_policy)],
) -> TokenPairResponse:
    """Rotate the refresh token; the one presented stops working."""
    try:
        result = sessions.refresh(body.refresh_token)
    except TokenInvalidError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        ) from e

    set_access_cookie(response, result.access_token, policy)
    return TokenPairResponse(
        message="Token refreshed successfully",
        data=TokenPairOut(
            access_token=result.access_token, refresh_token=result.refresh_token
        ),
    )


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    body: ForgotPasswordRequest,
    resets: Annotated[PasswordResetService, Depends(get_password_reset_service)],
) -> MessageResponse:
    """Same response whether or not the email belongs to an account."""
    try:
        resets.request_reset(body.email)
    except DeliveryFailureError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message
        ) from e
    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    body: ResetPasswordRequest,
    resets: Annotated[PasswordResetService, Depends(get_password_reset_service)],
) -> MessageResponse:
    try:
        resets.reset_password(body.token, body.new_password)
    except TokenInvalidError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return MessageResponse(
        message="Password has been reset successfully. You can now login with your new password."
    )

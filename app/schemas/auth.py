"""Request/response schemas for account, session and password-reset endpoints."""

from datetime import datetime
from pydantic import EmailStr, Field

from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """New account details."""

    name: str = Field(..., min_length=2, max_length=50, description="Display name")
    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class RefreshTokenRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token issued at login")


class ForgotPasswordRequest(CamelModel):
    email: EmailStr = Field(..., description="Account email")


class ResetPasswordRequest(CamelModel):
    token: str = Field(..., min_length=1, description="Reset token from the email link")
    new_password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class UserOut(CamelModel):
    """Non-sensitive user fields (never hashes)."""

    id: str
    name: str
    email: str
    role: str
    avatar: str | None = None
    created_at: datetime | None = None


class SessionOut(UserOut):
    """User fields plus the issued token pair."""

    access_token: str
    refresh_token: str


class TokenPairOut(CamelModel):
    access_token: str
    refresh_token: str


class UserResponse(CamelModel):
    success: bool = True
    message: str | None = None
    data: UserOut


class SessionResponse(CamelModel):
    success: bool = True
    message: str
    data: SessionOut


class TokenPairResponse(CamelModel):
    success: bool = True
    message: str
    data: TokenPairOut


class CurrentUser(CamelModel):
    """Authenticated identity taken from a verified access token."""

    id: str
    email: str
    role: str


class UserPageOut(CamelModel):
    users: list[UserOut]
    total: int
    page: int
    total_pages: int


class UsersListResponse(CamelModel):
    """Response for GET /admin/users (admin only)."""

    success: bool = True
    message: str
    data: UserPageOut


class RoleUpdateRequest(CamelModel):
    """Checked against USER/ADMIN by the service so a bad value is a 400, not a 422."""

    role: str = Field(..., max_length=32)

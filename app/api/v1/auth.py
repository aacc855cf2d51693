"""Auth dependencies: get_current_user (cookie or Bearer JWT) and require_admin."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.deps import get_cookie_policy, get_session_service
from app.core.cookies import CookiePolicy
from app.models.user import ROLE_ADMIN
from app.schemas.auth import CurrentUser
from app.services.errors import UnauthorizedError
from app.services.session import SessionService

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    policy: Annotated[CookiePolicy, Depends(get_cookie_policy)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> CurrentUser:
    """
    Dependency: require a valid access token and return the current user.

    The access-token cookie is checked first, then the Authorization header.
    Raises 401 if missing, invalid, expired, or the user no longer exists.
    """
    token = request.cookies.get(policy.name)
    if not token and credentials is not None:
        token = credentials.credentials
    try:
        user = sessions.authenticate(token)
    except UnauthorizedError as e:
        raise _unauthorized(e.message) from e
    return CurrentUser(id=user.id, email=user.email, role=user.role)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require role ADMIN. Raises 403 for anyone else."""
    if current_user.role != ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden. Insufficient permissions.",
        )
    return current_user

"""Admin user management (role ADMIN only): list, get, change role, soft delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_profile_cache
from app.api.v1.auth import require_admin
from app.core.database import get_db
from app.schemas.auth import (
    CurrentUser,
    RoleUpdateRequest,
    UserOut,
    UserPageOut,
    UserResponse,
    UsersListResponse,
)
from app.schemas.common import MessageResponse
from app.services import users as user_service
from app.services.cache import ProfileCache
from app.services.errors import NotFoundError, ServiceError

router = APIRouter()


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    search: Annotated[str | None, Query(max_length=100)] = None,
) -> UsersListResponse:
    """Active users, newest first; search matches name or email."""
    result = user_service.list_users(db, page=page, limit=limit, search=search)
    return UsersListResponse(
        message="Users retrieved successfully",
        data=UserPageOut(
            users=[UserOut.model_validate(u) for u in result.users],
            total=result.total,
            page=result.page,
            total_pages=result.total_pages,
        ),
    )


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    try:
        user = user_service.get_active_user(db, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return UserResponse(message="User retrieved successfully", data=UserOut.model_validate(user))


@router.put("/users/{user_id}/role", response_model=UserResponse)
def update_user_role(
    user_id: str,
    body: RoleUpdateRequest,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    cache: Annotated[ProfileCache, Depends(get_profile_cache)],
) -> UserResponse:
    try:
        user = user_service.update_user_role(db, user_id, body.role, cache)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except ServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return UserResponse(
        message="User role updated successfully", data=UserOut.model_validate(user)
    )


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    cache: Annotated[ProfileCache, Depends(get_profile_cache)],
) -> MessageResponse:
    """Soft delete; an admin cannot delete their own account."""
    try:
        user_service.soft_delete_user(db, user_id, acting_user_id=admin.id, cache=cache)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except ServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return MessageResponse(message="User deleted successfully")

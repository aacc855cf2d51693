"""Public profile page and profile management."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.errors import to_http_error
from app.api.v1.auth import get_current_user
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.common import MessageResponse
from app.schemas.portfolio import ProfileCreate, ProfileDetailOut, ProfileOut, ProfileUpdate
from app.services import portfolio
from app.services.errors import ServiceError

router = APIRouter()


@router.get("", response_model=ProfileDetailOut)
def get_profile(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    slug: Annotated[str | None, Query(max_length=255)] = None,
) -> ProfileDetailOut:
    """
    Full profile page by slug (DEFAULT_PROFILE_SLUG when omitted).

    Only active projects are included.
    """
    try:
        profile = portfolio.get_profile_by_slug(db, slug or settings.DEFAULT_PROFILE_SLUG)
    except ServiceError as e:
        raise to_http_error(e) from e
    out = ProfileDetailOut.model_validate(profile)
    out.projects = [p for p in out.projects if p.is_active]
    return out


@router.post("", response_model=ProfileOut, status_code=status.HTTP_201_CREATED)
def create_profile(
    body: ProfileCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfileOut:
    try:
        profile = portfolio.create_profile(db, current_user.id, body.model_dump())
    except ServiceError as e:
        raise to_http_error(e) from e
    return ProfileOut.model_validate(profile)


@router.put("", response_model=ProfileOut)
def update_profile(
    body: ProfileUpdate,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfileOut:
    changes = body.model_dump(exclude_unset=True, exclude={"slug"})
    try:
        profile = portfolio.update_profile(db, body.slug, changes)
    except ServiceError as e:
        raise to_http_error(e) from e
    return ProfileOut.model_validate(profile)


@router.delete("", response_model=MessageResponse)
def delete_profile(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    slug: Annotated[str, Query(min_length=1, max_length=255)],
) -> MessageResponse:
    try:
        portfolio.delete_profile(db, slug)
    except ServiceError as e:
        raise to_http_error(e) from e
    return MessageResponse(message="Profile deleted successfully")

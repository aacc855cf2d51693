"""CRUD routers for profile entries: education, work experience, social links."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.errors import to_http_error
from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.models import Education, SocialLink, WorkExperience
from app.schemas.auth import CurrentUser
from app.schemas.common import MessageResponse
from app.schemas.portfolio import (
    EducationCreate,
    EducationOut,
    EducationUpdate,
    SocialLinkCreate,
    SocialLinkOut,
    SocialLinkUpdate,
    WorkExperienceCreate,
    WorkExperienceOut,
    WorkExperienceUpdate,
)
from app.services import portfolio
from app.services.errors import ServiceError


def build_entry_router(
    model: type,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    out_schema: type[BaseModel],
    label: str,
) -> APIRouter:
    """
    List/create on the collection, get/update/delete by id.

    Reads are public; writes need a logged-in user. Create defaults profile_id
    to the caller's profile.
    """
    router = APIRouter()

    @router.get("", response_model=list[out_schema])
    def list_entries(db: Annotated[Session, Depends(get_db)]):
        return [out_schema.model_validate(r) for r in portfolio.list_entries(db, model)]

    @router.get("/{entry_id}", response_model=out_schema)
    def get_entry(entry_id: str, db: Annotated[Session, Depends(get_db)]):
        try:
            row = portfolio.get_or_404(db, model, entry_id, label)
        except ServiceError as e:
            raise to_http_error(e) from e
        return out_schema.model_validate(row)

    @router.post("", response_model=out_schema, status_code=status.HTTP_201_CREATED)
    def create_entry(
        body: create_schema,
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
        db: Annotated[Session, Depends(get_db)],
    ):
        data = body.model_dump(exclude={"profile_id"})
        try:
            profile_id = portfolio.resolve_profile_id(db, current_user.id, body.profile_id)
            row = portfolio.create_entry(db, model, profile_id, data)
        except ServiceError as e:
            raise to_http_error(e) from e
        return out_schema.model_validate(row)

    @router.put("/{entry_id}", response_model=out_schema)
    def update_entry(
        entry_id: str,
        body: update_schema,
        _user: Annotated[CurrentUser, Depends(get_current_user)],
        db: Annotated[Session, Depends(get_db)],
    ):
        try:
            row = portfolio.update_row(
                db, model, entry_id, body.model_dump(exclude_unset=True), label
            )
        except ServiceError as e:
            raise to_http_error(e) from e
        return out_schema.model_validate(row)

    @router.delete("/{entry_id}", response_model=MessageResponse)
    def delete_entry(
        entry_id: str,
        _user: Annotated[CurrentUser, Depends(get_current_user)],
        db: Annotated[Session, Depends(get_db)],
    ):
        try:
            portfolio.delete_row(db, model, entry_id, label)
        except ServiceError as e:
            raise to_http_error(e) from e
        return MessageResponse(message=f"{label} deleted successfully")

    return router


education_router = build_entry_router(
    Education, EducationCreate, EducationUpdate, EducationOut, "Education"
)
work_experience_router = build_entry_router(
    WorkExperience,
    WorkExperienceCreate,
    WorkExperienceUpdate,
    WorkExperienceOut,
    "Work experience",
)
social_links_router = build_entry_router(
    SocialLink, SocialLinkCreate, SocialLinkUpdate, SocialLinkOut, "Social link"
)

"""Skill catalogue."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.errors import to_http_error
from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.portfolio import SkillCreate, SkillOut
from app.services import portfolio
from app.services.errors import ServiceError

router = APIRouter()


@router.get("", response_model=list[SkillOut])
def list_skills(db: Annotated[Session, Depends(get_db)]) -> list[SkillOut]:
    return [SkillOut.model_validate(s) for s in portfolio.list_skills(db)]


@router.post("", response_model=SkillOut, status_code=status.HTTP_201_CREATED)
def create_skill(
    body: SkillCreate,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> SkillOut:
    """409 if a skill with this name exists."""
    try:
        skill = portfolio.create_skill(db, body.name, body.category)
    except ServiceError as e:
        raise to_http_error(e) from e
    return SkillOut.model_validate(skill)

"""Portfolio projects with linked technologies."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.errors import to_http_error
from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.models import Project
from app.schemas.auth import CurrentUser
from app.schemas.common import MessageResponse
from app.schemas.portfolio import ProjectCreate, ProjectOut, ProjectUpdate
from app.services import portfolio
from app.services.errors import ServiceError

router = APIRouter()


@router.get("", response_model=list[ProjectOut])
def list_projects(
    db: Annotated[Session, Depends(get_db)],
    featured: bool = False,
    active: bool = False,
) -> list[ProjectOut]:
    """Newest first; featured=true / active=true narrow the list."""
    projects = portfolio.list_projects(db, featured=featured, active=active)
    return [ProjectOut.model_validate(p) for p in projects]


@router.get("/{project_id}", response_model=ProjectOut)
def get_project(project_id: str, db: Annotated[Session, Depends(get_db)]) -> ProjectOut:
    try:
        project = portfolio.get_or_404(db, Project, project_id, "Project")
    except ServiceError as e:
        raise to_http_error(e) from e
    return ProjectOut.model_validate(project)


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(
    body: ProjectCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ProjectOut:
    """
    Create a project on the given profile (default: the caller's).

    Each technology name is linked as a skill, creating skills that do not exist yet.
    """
    data = body.model_dump(exclude={"profile_id", "technologies"})
    try:
        profile_id = portfolio.resolve_profile_id(db, current_user.id, body.profile_id)
        project = portfolio.create_project(db, profile_id, data, body.technologies)
    except ServiceError as e:
        raise to_http_error(e) from e
    return ProjectOut.model_validate(project)


@router.put("/{project_id}", response_model=ProjectOut)
def update_project(
    project_id: str,
    body: ProjectUpdate,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ProjectOut:
    changes = body.model_dump(exclude_unset=True, exclude={"technologies"})
    try:
        project = portfolio.update_project(db, project_id, changes, body.technologies)
    except ServiceError as e:
        raise to_http_error(e) from e
    return ProjectOut.model_validate(project)


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    project_id: str,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    try:
        portfolio.delete_row(db, Project, project_id, "Project")
    except ServiceError as e:
        raise to_http_error(e) from e
    return MessageResponse(message="Project deleted successfully")

"""Portfolio content persistence: profile page, skills, projects, career entries, blog posts."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import (
    BlogPost,
    Education,
    Profile,
    Project,
    ProjectSkill,
    Skill,
    SocialLink,
    WorkExperience,
)
from app.services.errors import ConflictError, NotFoundError, ServiceError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

# Entries owned by a profile, keyed by the label used in error messages.
PROFILE_ENTRIES: dict[type, str] = {
    Education: "Education",
    WorkExperience: "Work experience",
    SocialLink: "Social link",
}


@contextmanager
def _committing(db: Session, what: str) -> Iterator[None]:
    """Commit after the block; a unique-constraint violation anywhere in it becomes ConflictError."""
    try:
        yield
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"{what} already exists") from e


def _commit(db: Session, what: str) -> None:
    with _committing(db, what):
        pass


def get_or_404(db: Session, model: type[ModelT], row_id: str, label: str) -> ModelT:
    row = db.get(model, row_id)
    if row is None:
        raise NotFoundError(f"{label} not found")
    return row


# --------------------------------------------------------------------------- #
# Profile
# --------------------------------------------------------------------------- #


def get_profile_by_slug(db: Session, slug: str) -> Profile:
    profile = db.execute(select(Profile).where(Profile.slug == slug)).scalar_one_or_none()
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


def get_profile_for_user(db: Session, user_id: str) -> Profile | None:
    return db.execute(select(Profile).where(Profile.user_id == user_id)).scalar_one_or_none()


def create_profile(db: Session, user_id: str, data: dict[str, Any]) -> Profile:
    """One profile per user. Raises ServiceError if the caller already has one."""
    if get_profile_for_user(db, user_id) is not None:
        raise ServiceError("Profile already exists")
    profile = Profile(user_id=user_id, **data)
    db.add(profile)
    _commit(db, "Profile")
    db.refresh(profile)
    logger.info("Profile created", extra={"profile_id": profile.id, "user_id": user_id})
    return profile


def update_profile(db: Session, slug: str, changes: dict[str, Any]) -> Profile:
    profile = get_profile_by_slug(db, slug)
    for key, value in changes.items():
        setattr(profile, key, value)
    _commit(db, "Profile")
    db.refresh(profile)
    return profile


def delete_profile(db: Session, slug: str) -> None:
    profile = get_profile_by_slug(db, slug)
    db.delete(profile)
    db.commit()
    logger.info("Profile deleted", extra={"slug": slug})


def resolve_profile_id(db: Session, user_id: str, profile_id: str | None) -> str:
    """Explicit profile_id if given and existing, else the caller's own profile."""
    if profile_id:
        return get_or_404(db, Profile, profile_id, "Profile").id
    profile = get_profile_for_user(db, user_id)
    if profile is None:
        raise ServiceError("Profile not found for user")
    return profile.id


# --------------------------------------------------------------------------- #
# Skills
# --------------------------------------------------------------------------- #


def list_skills(db: Session) -> list[Skill]:
    return list(db.execute(select(Skill).order_by(Skill.name.asc())).scalars())


def create_skill(db: Session, name: str, category: str | None = None) -> Skill:
    existing = db.execute(select(Skill).where(Skill.name == name)).scalar_one_or_none()
    if existing is not None:
        raise ConflictError("Skill already exists")
    skill = Skill(name=name, category=category)
    db.add(skill)
    _commit(db, "Skill")
    db.refresh(skill)
    return skill


def _get_or_create_skill(db: Session, name: str) -> Skill:
    skill = db.execute(select(Skill).where(Skill.name == name)).scalar_one_or_none()
    if skill is None:
        skill = Skill(name=name)
        db.add(skill)
        db.flush()
    return skill


# --------------------------------------------------------------------------- #
# Projects
# --------------------------------------------------------------------------- #


def list_projects(
    db: Session, *, featured: bool = False, active: bool = False
) -> list[Project]:
    """Newest first. A True flag filters on it; False means no filter."""
    stmt = select(Project)
    if featured:
        stmt = stmt.where(Project.is_featured.is_(True))
    if active:
        stmt = stmt.where(Project.is_active.is_(True))
    return list(db.execute(stmt.order_by(Project.created_at.desc())).scalars())


def _link_technologies(db: Session, project: Project, technologies: list[str]) -> None:
    """Replace the project's skill links; tags mirror the technology names."""
    names = list(dict.fromkeys(t.strip() for t in technologies if t.strip()))
    project.project_skills.clear()
    db.flush()
    for name in names:
        project.project_skills.append(ProjectSkill(skill=_get_or_create_skill(db, name)))
    project.tags = names


def create_project(
    db: Session, profile_id: str, data: dict[str, Any], technologies: list[str]
) -> Project:
    project = Project(profile_id=profile_id, **data)
    with _committing(db, "Project"):
        db.add(project)
        db.flush()
        _link_technologies(db, project, technologies)
    db.refresh(project)
    logger.info("Project created", extra={"project_id": project.id})
    return project


def update_project(
    db: Session, project_id: str, changes: dict[str, Any], technologies: list[str] | None
) -> Project:
    project = get_or_404(db, Project, project_id, "Project")
    with _committing(db, "Project"):
        for key, value in changes.items():
            setattr(project, key, value)
        if technologies is not None:
            _link_technologies(db, project, technologies)
    db.refresh(project)
    return project


# --------------------------------------------------------------------------- #
# Education, work experience, social links
# --------------------------------------------------------------------------- #


def list_entries(db: Session, model: type[ModelT]) -> list[ModelT]:
    if model is SocialLink:
        order = SocialLink.sort_order.asc()
    else:
        order = model.start_date.desc()
    return list(db.execute(select(model).order_by(order)).scalars())


def create_entry(db: Session, model: type[ModelT], profile_id: str, data: dict[str, Any]) -> ModelT:
    row = model(profile_id=profile_id, **data)
    db.add(row)
    _commit(db, PROFILE_ENTRIES[model])
    db.refresh(row)
    return row


def update_row(db: Session, model: type[ModelT], row_id: str, changes: dict[str, Any], label: str) -> ModelT:
    row = get_or_404(db, model, row_id, label)
    for key, value in changes.items():
        setattr(row, key, value)
    _commit(db, label)
    db.refresh(row)
    return row


def delete_row(db: Session, model: type, row_id: str, label: str) -> None:
    row = get_or_404(db, model, row_id, label)
    db.delete(row)
    db.commit()
    logger.info("%s deleted", label, extra={"row_id": row_id})


# --------------------------------------------------------------------------- #
# Blog
# --------------------------------------------------------------------------- #


def list_blog_posts(db: Session, *, published: bool = False) -> list[BlogPost]:
    stmt = select(BlogPost)
    if published:
        stmt = stmt.where(BlogPost.published_at.is_not(None))
    return list(db.execute(stmt.order_by(BlogPost.created_at.desc())).scalars())


def get_blog_post_by_slug(db: Session, slug: str) -> BlogPost:
    post = db.execute(select(BlogPost).where(BlogPost.slug == slug)).scalar_one_or_none()
    if post is None:
        raise NotFoundError("Blog post not found")
    return post


def create_blog_post(db: Session, user_id: str, data: dict[str, Any]) -> BlogPost:
    """Author is the caller's profile; ServiceError if the caller has none."""
    profile = get_profile_for_user(db, user_id)
    if profile is None:
        raise ServiceError("Profile not found for user")
    post = BlogPost(author_id=profile.id, **data)
    db.add(post)
    _commit(db, "Blog post")
    db.refresh(post)
    logger.info("Blog post created", extra={"post_id": post.id})
    return post

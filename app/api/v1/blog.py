"""Blog posts: public list and read by slug, authenticated writes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.errors import to_http_error
from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.models import BlogPost
from app.schemas.auth import CurrentUser
from app.schemas.blog import BlogPostCreate, BlogPostOut, BlogPostUpdate
from app.schemas.common import MessageResponse
from app.services import portfolio
from app.services.errors import ServiceError

router = APIRouter()


@router.get("", response_model=list[BlogPostOut])
def list_blog_posts(
    db: Annotated[Session, Depends(get_db)],
    published: bool = False,
) -> list[BlogPostOut]:
    """Newest first; published=true hides drafts."""
    return [BlogPostOut.model_validate(p) for p in portfolio.list_blog_posts(db, published=published)]


@router.get("/{slug}", response_model=BlogPostOut)
def get_blog_post(slug: str, db: Annotated[Session, Depends(get_db)]) -> BlogPostOut:
    try:
        post = portfolio.get_blog_post_by_slug(db, slug)
    except ServiceError as e:
        raise to_http_error(e) from e
    return BlogPostOut.model_validate(post)


@router.post("", response_model=BlogPostOut, status_code=status.HTTP_201_CREATED)
def create_blog_post(
    body: BlogPostCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> BlogPostOut:
    """The caller's profile becomes the author; 400 if the caller has no profile."""
    try:
        post = portfolio.create_blog_post(db, current_user.id, body.model_dump())
    except ServiceError as e:
        raise to_http_error(e) from e
    return BlogPostOut.model_validate(post)


@router.put("/{post_id}", response_model=BlogPostOut)
def update_blog_post(
    post_id: str,
    body: BlogPostUpdate,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> BlogPostOut:
    try:
        post = portfolio.update_row(
            db, BlogPost, post_id, body.model_dump(exclude_unset=True), "Blog post"
        )
    except ServiceError as e:
        raise to_http_error(e) from e
    return BlogPostOut.model_validate(post)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_blog_post(
    post_id: str,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    try:
        portfolio.delete_row(db, BlogPost, post_id, "Blog post")
    except ServiceError as e:
        raise to_http_error(e) from e
    return MessageResponse(message="Blog post deleted successfully")

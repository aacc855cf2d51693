"""ORM model for blog posts authored by a profile."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import relationship

from app.models.base import Base, new_id


class BlogPost(Base):
    """
    Blog post addressed by slug.

    published_at is null for drafts; the public list can filter on it.
    """

    __tablename__ = "blog_posts"

    id = Column(String(36), primary_key=True, default=new_id)
    author_id = Column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    content = Column(Text, nullable=False)
    summary = Column(Text, nullable=True)
    cover_image = Column(String(2048), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    published_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    author = relationship("Profile", lazy="joined")

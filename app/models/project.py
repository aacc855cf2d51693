"""ORM models for portfolio projects and their linked skills."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from app.models.base import Base, new_id


class Project(Base):
    """Portfolio project; tags mirror the linked technology names."""

    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=new_id)
    profile_id = Column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    website_url = Column(String(2048), nullable=True)
    repo_url = Column(String(2048), nullable=True)
    image_url = Column(String(2048), nullable=True)
    video_url = Column(String(2048), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    project_skills = relationship(
        "ProjectSkill", cascade="all, delete-orphan", lazy="selectin"
    )


class ProjectSkill(Base):
    """Link between a project and a skill."""

    __tablename__ = "project_skills"
    __table_args__ = (UniqueConstraint("project_id", "skill_id"),)

    id = Column(String(36), primary_key=True, default=new_id)
    project_id = Column(
        String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    skill_id = Column(String(36), ForeignKey("skills.id", ondelete="CASCADE"), nullable=False)

    skill = relationship("Skill", lazy="joined")

"""ORM models for the public portfolio profile, its skill ordering and social links."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from app.models.base import Base, new_id


class Profile(Base):
    """One public profile per user, addressed by slug."""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=new_id)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    full_name = Column(String(255), nullable=False)
    headline = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    location_link = Column(String(2048), nullable=True)
    avatar_url = Column(String(2048), nullable=True)
    short_bio = Column(Text, nullable=True)
    email = Column(String(255), nullable=True)
    telephone = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    social_links = relationship(
        "SocialLink", order_by="SocialLink.sort_order", cascade="all, delete-orphan"
    )
    work_experience = relationship(
        "WorkExperience", order_by="desc(WorkExperience.start_date)", cascade="all, delete-orphan"
    )
    education = relationship(
        "Education", order_by="desc(Education.start_date)", cascade="all, delete-orphan"
    )
    projects = relationship(
        "Project", order_by="desc(Project.created_at)", cascade="all, delete-orphan"
    )
    profile_skills = relationship(
        "ProfileSkill", order_by="ProfileSkill.sort_order", cascade="all, delete-orphan"
    )


class ProfileSkill(Base):
    """Skill shown on a profile, with display order."""

    __tablename__ = "profile_skills"
    __table_args__ = (UniqueConstraint("profile_id", "skill_id"),)

    id = Column(String(36), primary_key=True, default=new_id)
    profile_id = Column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    skill_id = Column(String(36), ForeignKey("skills.id", ondelete="CASCADE"), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)

    skill = relationship("Skill", lazy="joined")


class SocialLink(Base):
    """External link (GitHub, LinkedIn, ...) shown on the profile; navbar marks header links."""

    __tablename__ = "social_links"

    id = Column(String(36), primary_key=True, default=new_id)
    profile_id = Column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    platform = Column(String(64), nullable=False)
    url = Column(String(2048), nullable=False)
    icon = Column(String(64), nullable=True)
    navbar = Column(Boolean, nullable=False, default=False)
    sort_order = Column(Integer, nullable=False, default=0)

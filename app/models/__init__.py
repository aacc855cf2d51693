"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.blog import BlogPost
from app.models.education import Education
from app.models.profile import Profile, ProfileSkill, SocialLink
from app.models.project import Project, ProjectSkill
from app.models.skill import Skill
from app.models.user import User
from app.models.work_experience import WorkExperience

__all__ = [
    "Base",
    "BlogPost",
    "Education",
    "Profile",
    "ProfileSkill",
    "Project",
    "ProjectSkill",
    "Skill",
    "SocialLink",
    "User",
    "WorkExperience",
]

"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    SessionResponse,
    TokenPairResponse,
    UserOut,
    UserResponse,
    UsersListResponse,
)
from app.schemas.blog import BlogPostCreate, BlogPostOut, BlogPostUpdate
from app.schemas.common import CamelModel, MessageResponse
from app.schemas.health import HealthResponse
from app.schemas.portfolio import (
    EducationOut,
    ProfileDetailOut,
    ProfileOut,
    ProjectOut,
    SkillOut,
    SocialLinkOut,
    WorkExperienceOut,
)

__all__ = [
    "BlogPostCreate",
    "BlogPostOut",
    "BlogPostUpdate",
    "CamelModel",
    "CurrentUser",
    "EducationOut",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "ProfileDetailOut",
    "ProfileOut",
    "ProjectOut",
    "RegisterRequest",
    "SessionResponse",
    "SkillOut",
    "SocialLinkOut",
    "TokenPairResponse",
    "UserOut",
    "UserResponse",
    "UsersListResponse",
    "WorkExperienceOut",
]

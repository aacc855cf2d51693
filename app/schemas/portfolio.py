"""Pydantic schemas for portfolio content: profile, skills, projects, education, work, links."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel

URL_MAX_LEN = 2048


# --- Skills ---


class SkillCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str | None = Field(default=None, max_length=64)


class SkillOut(CamelModel):
    id: str
    name: str
    category: str | None = None


class ProfileSkillOut(CamelModel):
    id: str
    sort_order: int
    skill: SkillOut


class ProjectSkillOut(CamelModel):
    id: str
    skill: SkillOut


# --- Social links ---


class SocialLinkCreate(CamelModel):
    profile_id: str | None = Field(
        default=None, description="Defaults to the caller's profile"
    )
    platform: str = Field(..., min_length=1, max_length=64)
    url: str = Field(..., min_length=1, max_length=URL_MAX_LEN)
    icon: str | None = Field(default=None, max_length=64)
    navbar: bool = False
    sort_order: int = 0


class SocialLinkUpdate(CamelModel):
    platform: str | None = Field(default=None, min_length=1, max_length=64)
    url: str | None = Field(default=None, min_length=1, max_length=URL_MAX_LEN)
    icon: str | None = Field(default=None, max_length=64)
    navbar: bool | None = None
    sort_order: int | None = None


class SocialLinkOut(CamelModel):
    id: str
    profile_id: str
    platform: str
    url: str
    icon: str | None = None
    navbar: bool
    sort_order: int


# --- Education ---


class EducationCreate(CamelModel):
    profile_id: str | None = None
    institution: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    logo_url: str | None = Field(default=None, max_length=URL_MAX_LEN)
    start_date: datetime
    end_date: datetime | None = None


class EducationUpdate(CamelModel):
    institution: str | None = Field(default=None, min_length=1, max_length=255)
    degree: str | None = Field(default=None, min_length=1, max_length=255)
    logo_url: str | None = Field(default=None, max_length=URL_MAX_LEN)
    start_date: datetime | None = None
    end_date: datetime | None = None


class EducationOut(CamelModel):
    id: str
    profile_id: str
    institution: str
    degree: str
    logo_url: str | None = None
    start_date: datetime
    end_date: datetime | None = None


# --- Work experience ---


class WorkExperienceCreate(CamelModel):
    profile_id: str | None = None
    company: str = Field(..., min_length=1, max_length=255)
    position: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(default=None, max_length=255)
    website: str | None = Field(default=None, max_length=URL_MAX_LEN)
    description: str | None = None
    logo_url: str | None = Field(default=None, max_length=URL_MAX_LEN)
    start_date: datetime
    end_date: datetime | None = None


class WorkExperienceUpdate(CamelModel):
    company: str | None = Field(default=None, min_length=1, max_length=255)
    position: str | None = Field(default=None, min_length=1, max_length=255)
    location: str | None = Field(default=None, max_length=255)
    website: str | None = Field(default=None, max_length=URL_MAX_LEN)
    description: str | None = None
    logo_url: str | None = Field(default=None, max_length=URL_MAX_LEN)
    start_date: datetime | None = None
    end_date: datetime | None = None


class WorkExperienceOut(CamelModel):
    id: str
    profile_id: str
    company: str
    position: str
    location: str | None = None
    website: str | None = None
    description: str | None = None
    logo_url: str | None = None
    start_date: datetime
    end_date: datetime | None = None


# --- Projects ---


class ProjectCreate(CamelModel):
    """
    New project. technologies are skill names: missing skills are created and
    linked, and tags are set to the same list.
    """

    profile_id: str | None = None
    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    website_url: str | None = Field(default=None, max_length=URL_MAX_LEN)
    repo_url: str | None = Field(default=None, max_length=URL_MAX_LEN)
    image_url: str | None = Field(default=None, max_length=URL_MAX_LEN)
    video_url: str | None = Field(default=None, max_length=URL_MAX_LEN)
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_active: bool = True
    is_featured: bool = False
    technologies: list[str] = Field(default_factory=list)


class ProjectUpdate(CamelModel):
    """Partial update; a technologies list (even empty) replaces the skill links."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    website_url: str | None = Field(default=None, max_length=URL_MAX_LEN)
    repo_url: str | None = Field(default=None, max_length=URL_MAX_LEN)
    image_url: str | None = Field(default=None, max_length=URL_MAX_LEN)
    video_url: str | None = Field(default=None, max_length=URL_MAX_LEN)
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_active: bool | None = None
    is_featured: bool | None = None
    technologies: list[str] | None = None


class ProjectOut(CamelModel):
    id: str
    profile_id: str
    title: str
    slug: str
    description: str | None = None
    website_url: str | None = None
    repo_url: str | None = None
    image_url: str | None = None
    video_url: str | None = None
    tags: list[str] = Field(default_factory=list)
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_active: bool
    is_featured: bool
    created_at: datetime | None = None
    project_skills: list[ProjectSkillOut] = Field(default_factory=list)


# --- Profile ---


class ProfileCreate(CamelModel):
    slug: str = Field(..., min_length=1, max_length=255)
    full_name: str = Field(..., min_length=1, max_length=255)
    headline: str | None = None
    location: str | None = Field(default=None, max_length=255)
    location_link: str | None = Field(default=None, max_length=URL_MAX_LEN)
    avatar_url: str | None = Field(default=None, max_length=URL_MAX_LEN)
    short_bio: str | None = None
    email: str | None = Field(default=None, max_length=255)
    telephone: str | None = Field(default=None, max_length=64)


class ProfileUpdate(CamelModel):
    """Update addressed by slug; slug itself is not changed."""

    slug: str = Field(..., min_length=1, max_length=255)
    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    headline: str | None = None
    location: str | None = Field(default=None, max_length=255)
    location_link: str | None = Field(default=None, max_length=URL_MAX_LEN)
    avatar_url: str | None = Field(default=None, max_length=URL_MAX_LEN)
    short_bio: str | None = None
    email: str | None = Field(default=None, max_length=255)
    telephone: str | None = Field(default=None, max_length=64)


class ProfileOut(CamelModel):
    id: str
    slug: str
    user_id: str
    full_name: str
    headline: str | None = None
    location: str | None = None
    location_link: str | None = None
    avatar_url: str | None = None
    short_bio: str | None = None
    email: str | None = None
    telephone: str | None = None


class ProfileDetailOut(ProfileOut):
    """Public profile page with every section."""

    social_links: list[SocialLinkOut] = Field(default_factory=list)
    work_experience: list[WorkExperienceOut] = Field(default_factory=list)
    education: list[EducationOut] = Field(default_factory=list)
    projects: list[ProjectOut] = Field(default_factory=list)
    profile_skills: list[ProfileSkillOut] = Field(default_factory=list)

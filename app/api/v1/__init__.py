"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import admin, blog, health, profile, projects, skills, users
from app.api.v1.entries import education_router, social_links_router, work_experience_router

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(profile.router, prefix="/profile", tags=["profile"])
router.include_router(skills.router, prefix="/skills", tags=["skills"])
router.include_router(projects.router, prefix="/projects", tags=["projects"])
router.include_router(education_router, prefix="/education", tags=["education"])
router.include_router(
    work_experience_router, prefix="/work-experience", tags=["work-experience"]
)
router.include_router(social_links_router, prefix="/social-links", tags=["social-links"])
router.include_router(blog.router, prefix="/blog", tags=["blog"])

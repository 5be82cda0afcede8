"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import announcements, audit, auth, functions, health, profile, projects, session

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(functions.router, prefix="/functions", tags=["functions"])
router.include_router(session.router, prefix="/session", tags=["session"])
router.include_router(profile.router, prefix="/profile", tags=["profile"])
router.include_router(audit.router, prefix="/audit", tags=["audit"])
router.include_router(projects.router, prefix="/projects", tags=["projects"])
router.include_router(announcements.router, prefix="/announcements", tags=["announcements"])
router.include_router(
    announcements.notifications_router, prefix="/notifications", tags=["notifications"]
)

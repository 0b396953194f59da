"""API routes."""

from fastapi import APIRouter

from hiring_portal.api.routes import analytics, auth, messages, projects, saved_projects

api_router = APIRouter()

# Paths match the existing web client (/api/register, /api/projects, ...)
api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(projects.router, tags=["Projects"])
api_router.include_router(saved_projects.router, tags=["Saved Projects"])
api_router.include_router(messages.router, tags=["Messages"])
api_router.include_router(analytics.router, tags=["Analytics"])

"""
Top-level router for version 1 of the API.
"""

from fastapi import APIRouter

from .endpoints import activities, registrations

router = APIRouter()

router.include_router(activities.router, prefix="/activities", tags=["activities"])
# Registration routes span /activities/{id}/registrations and /users/me,
# so they carry their full paths themselves.
router.include_router(registrations.router, tags=["registrations"])

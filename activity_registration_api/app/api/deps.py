"""
Shared dependencies for API routes.

Services are built per request around the application's ``Database``
handle, which ``create_app`` stores on ``app.state``.
"""

from fastapi import Depends

from ..core.db import Database, get_database
from ..services.activity_service import ActivityService
from ..services.registration_service import RegistrationService


def get_activity_service(database: Database = Depends(get_database)) -> ActivityService:
    return ActivityService(database)


def get_registration_service(database: Database = Depends(get_database)) -> RegistrationService:
    return RegistrationService(database)

"""
Service layer.

Each service receives the ``Database`` handle it works on, so handlers,
the CLI and tests can point it at any SQLite file.
"""

from .activity_service import ActivityService  # noqa: F401
from .registration_service import RegistrationService  # noqa: F401

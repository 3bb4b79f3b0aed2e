"""
Pydantic schemas exchanged by the API and returned by the services.
"""

from .activity import ActivityBase, ActivityCreate, ActivityRead  # noqa: F401
from .registration import RegistrationRead  # noqa: F401

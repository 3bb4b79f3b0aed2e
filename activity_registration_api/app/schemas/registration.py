"""
Pydantic models for registrations.
"""

from pydantic import BaseModel


class RegistrationRead(BaseModel):
    """Outcome of a successful signup."""

    success: bool
    user_id: str
    activity_id: int

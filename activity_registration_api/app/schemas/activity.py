"""
Pydantic models for activity data.

``ActivityBase`` holds the fields an administrator supplies when an
activity is created; ``ActivityCreate`` is the request body and
``ActivityRead`` adds the identifier assigned by the store.  The models
carry no storage details: rows are mapped onto them by
``crud.activities.row_to_activity``.
"""

from pydantic import BaseModel, Field


class ActivityBase(BaseModel):
    spots: int = Field(..., ge=0, examples=[40])
    activity_type: str = Field("", examples=["talk"])
    room: str = Field("", examples=["Auditorium 1"])
    speaker: str = Field("", examples=["Ada Lovelace"])
    topic: str = Field("", examples=["Analytical engines"])
    description: str = Field("", examples=["An introduction to programmable machines"])
    time: str = Field("", examples=["14:00"])
    day: int = Field(..., examples=[2])


class ActivityCreate(ActivityBase):
    """Schema for creating an activity."""
    pass


class ActivityRead(ActivityBase):
    """Schema for reading an activity, with its remaining ``spots``."""

    id: int

    model_config = {
        "from_attributes": True,
    }

    def __str__(self) -> str:
        return (
            f"id: {self.id} | spots: {self.spots} | day: {self.day} | time: {self.time}\n"
            f"room: {self.room} | type: {self.activity_type}\n"
            f"speaker: {self.speaker} | topic {self.topic}\n"
            f"description: {self.description}"
        )

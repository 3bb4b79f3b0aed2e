"""
Read access to activities and administrative creation.

``ActivityService`` is a thin layer over ``crud.activities``: it opens a
connection on the injected ``Database``, runs one query and maps the
result.  It enforces no registration rules; those live in
``RegistrationService``.
"""

import logging
from typing import List

from ..core.db import Database
from ..core.errors import NotFound
from ..crud import activities
from ..schemas.activity import ActivityCreate, ActivityRead


logger = logging.getLogger(__name__)


class ActivityService:
    """Query façade over the activity store."""

    def __init__(self, database: Database) -> None:
        self.database = database

    def list_activities(self) -> List[ActivityRead]:
        """Return every activity, ordered by id."""
        with self.database.connection() as conn:
            return activities.fetch_all(conn)

    def get_activity(self, activity_id: int) -> ActivityRead:
        """Return a single activity.

        Raises ``NotFound`` if no activity has this id.
        """
        with self.database.connection() as conn:
            activity = activities.fetch_one(conn, activity_id)
        if activity is None:
            raise NotFound(activity_id)
        return activity

    def create_activity(self, data: ActivityCreate) -> int:
        """Insert a new activity and return the id assigned by the store."""
        with self.database.transaction() as tx:
            activity_id = activities.insert(tx, data)
            tx.commit()
        logger.info("Created activity %s (%s, day %s, %s spots)", activity_id, data.topic, data.day, data.spots)
        return activity_id

    def list_user_activities(self, user_id: str) -> List[ActivityRead]:
        """Activities the user is registered for, ordered by ``(day, time)``."""
        with self.database.connection() as conn:
            return activities.fetch_for_user(conn, user_id)

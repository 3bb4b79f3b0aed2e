"""
Business logic for signing users up to activities and withdrawing them.

Each operation runs as one atomic unit on the injected ``Database``:
the preconditions are checked in a fixed order, the first failing check
raises and the unit is rolled back, and the registration row together
with the ``spots`` adjustment is committed only after every check has
passed.  Because the unit holds the database write lock from its first
read, two signups racing for the last spot are serialised and the
second one observes ``spots == 0``.
"""

import logging

from ..core.db import Database
from ..core.errors import (
    AlreadyRegistered,
    BusinessRuleError,
    DayConflict,
    NoSpotsAvailable,
    NotFound,
    NotRegistered,
)
from ..crud import activities, registrations


logger = logging.getLogger(__name__)


class RegistrationService:
    """Registration engine for activities."""

    def __init__(self, database: Database) -> None:
        self.database = database

    def sign_up(self, user_id: str, activity_id: int) -> bool:
        """Register ``user_id`` for an activity.

        Checks, in order:

        1. the user is not already registered for this activity
           (``AlreadyRegistered``);
        2. the activity exists (``NotFound``);
        3. the user has no other registration on the activity's day
           (``DayConflict``);
        4. a spot is left (``NoSpotsAvailable``).

        The duplicate check must come before the day check, otherwise an
        existing registration for this very activity would be reported
        as a day conflict.

        Returns ``True`` once the registration and the spot decrement
        are committed.
        """
        try:
            with self.database.transaction() as tx:
                if registrations.exists(tx, user_id, activity_id):
                    raise AlreadyRegistered()

                slot = activities.fetch_slot(tx, activity_id)
                if slot is None:
                    raise NotFound(activity_id)
                day, spots = slot

                if registrations.count_on_day(tx, user_id, day) > 0:
                    raise DayConflict(day)

                if spots <= 0:
                    raise NoSpotsAvailable()

                registrations.insert(tx, user_id, activity_id)
                activities.adjust_spots(tx, activity_id, -1)
                tx.commit()
        except (BusinessRuleError, NotFound) as exc:
            logger.info("Signup of %s for activity %s rejected: %s", user_id, activity_id, exc)
            raise

        logger.info("User %s signed up for activity %s", user_id, activity_id)
        return True

    def unregister(self, user_id: str, activity_id: int) -> None:
        """Withdraw ``user_id`` from an activity and free its spot.

        Raises ``NotRegistered`` if the user holds no registration for
        the activity; ``spots`` is left unchanged in that case.
        """
        with self.database.transaction() as tx:
            if not registrations.exists(tx, user_id, activity_id):
                logger.info("User %s is not registered for activity %s", user_id, activity_id)
                raise NotRegistered()

            registrations.delete(tx, user_id, activity_id)
            activities.adjust_spots(tx, activity_id, 1)
            tx.commit()

        logger.info("User %s unregistered from activity %s", user_id, activity_id)

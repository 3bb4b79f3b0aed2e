"""
Error taxonomy for the registration core.

Business-rule violations (``NotFound`` and the ``BusinessRuleError``
family) are deterministic and user-facing.  ``StorageError`` wraps an
infrastructure failure from the database driver; its message is meant
for logs, not for clients.
"""


class ActivityRegistrationError(Exception):
    """Base class for all errors raised by the core."""


class NotFound(ActivityRegistrationError):
    """The requested activity does not exist."""

    def __init__(self, activity_id: int) -> None:
        super().__init__(f"No activity found with id: {activity_id}")
        self.activity_id = activity_id


class BusinessRuleError(ActivityRegistrationError):
    """A registration rule rejected the request."""


class AlreadyRegistered(BusinessRuleError):
    def __init__(self) -> None:
        super().__init__("user is already signed up for this activity")


class DayConflict(BusinessRuleError):
    def __init__(self, day: int) -> None:
        super().__init__("user already has an activity on this day")
        self.day = day


class NoSpotsAvailable(BusinessRuleError):
    def __init__(self) -> None:
        super().__init__("no spots available")


class NotRegistered(BusinessRuleError):
    def __init__(self) -> None:
        super().__init__("user is not registered for this activity")


class StorageError(ActivityRegistrationError):
    """The datastore failed; the original exception is chained as ``__cause__``."""

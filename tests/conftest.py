# tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from activity_registration_api.app.core.db import Database, init_db
from activity_registration_api.app.main import create_app
from activity_registration_api.app.schemas.activity import ActivityCreate
from activity_registration_api.app.services.activity_service import ActivityService
from activity_registration_api.app.services.registration_service import RegistrationService


@pytest.fixture(scope="function")
def database(tmp_path):
    """A freshly migrated SQLite database in the test's temp directory."""
    db = Database(str(tmp_path / "activities.db"))
    init_db(db)
    return db


@pytest.fixture
def activity_service(database):
    return ActivityService(database)


@pytest.fixture
def registration_service(database):
    return RegistrationService(database)


@pytest.fixture
def make_activity(activity_service):
    """Factory inserting an activity and returning its id."""

    def _make(**overrides):
        fields = {
            "spots": 10,
            "activity_type": "talk",
            "room": "Auditorium 1",
            "speaker": "Grace Hopper",
            "topic": "Compilers",
            "description": "How programs become machine code",
            "time": "10:00",
            "day": 1,
        }
        fields.update(overrides)
        return activity_service.create_activity(ActivityCreate(**fields))

    return _make


@pytest.fixture
def spots_of(database):
    """Read the current ``spots`` of an activity straight from the table."""

    def _spots(activity_id):
        with database.connection() as conn:
            return conn.execute("SELECT spots FROM activities WHERE id = ?", (activity_id,)).fetchone()["spots"]

    return _spots


@pytest.fixture(scope="function")
def client(database):
    """TestClient bound to an app that uses the test database."""
    app = create_app(database)
    with TestClient(app) as test_client:
        yield test_client

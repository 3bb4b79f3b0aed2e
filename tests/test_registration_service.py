# tests/test_registration_service.py

import sqlite3
import threading

import pytest

from activity_registration_api.app.core.errors import (
    AlreadyRegistered,
    BusinessRuleError,
    DayConflict,
    NoSpotsAvailable,
    NotFound,
    NotRegistered,
    StorageError,
)
from activity_registration_api.app.crud import activities as activities_crud
from tests.utils import USER_A, USER_B


def registration_count(database, activity_id):
    with database.connection() as conn:
        return conn.execute(
            "SELECT COUNT(*) AS total FROM registrations WHERE activity_id = ?",
            (activity_id,),
        ).fetchone()["total"]


def test_last_spot_is_released_and_taken_again(registration_service, make_activity, spots_of):
    activity_id = make_activity(day=2, spots=1)

    assert registration_service.sign_up(USER_A, activity_id) is True
    assert spots_of(activity_id) == 0

    with pytest.raises(NoSpotsAvailable):
        registration_service.sign_up(USER_B, activity_id)
    assert spots_of(activity_id) == 0

    registration_service.unregister(USER_A, activity_id)
    assert spots_of(activity_id) == 1

    assert registration_service.sign_up(USER_B, activity_id) is True
    assert spots_of(activity_id) == 0


def test_same_day_signup_is_a_conflict(registration_service, make_activity, spots_of):
    first = make_activity(day=3)
    second = make_activity(day=3, time="15:00")
    registration_service.sign_up(USER_A, first)

    with pytest.raises(DayConflict) as exc_info:
        registration_service.sign_up(USER_A, second)

    assert exc_info.value.day == 3
    assert spots_of(second) == 10


def test_other_users_on_the_same_day_do_not_conflict(registration_service, make_activity):
    first = make_activity(day=3)
    second = make_activity(day=3)
    registration_service.sign_up(USER_A, first)

    assert registration_service.sign_up(USER_B, second) is True


def test_signups_on_different_days(registration_service, make_activity, activity_service):
    day_one = make_activity(day=1)
    day_two = make_activity(day=2)

    registration_service.sign_up(USER_A, day_one)
    registration_service.sign_up(USER_A, day_two)

    assert [a.id for a in activity_service.list_user_activities(USER_A)] == [day_one, day_two]


def test_second_signup_reports_already_registered(registration_service, make_activity, spots_of, database):
    activity_id = make_activity(spots=5)

    assert registration_service.sign_up(USER_A, activity_id) is True
    # Must not be reported as a conflict with the activity's own day.
    with pytest.raises(AlreadyRegistered):
        registration_service.sign_up(USER_A, activity_id)

    assert registration_count(database, activity_id) == 1
    assert spots_of(activity_id) == 4


def test_signup_for_unknown_activity(registration_service):
    with pytest.raises(NotFound) as exc_info:
        registration_service.sign_up(USER_A, 999)
    assert "999" in str(exc_info.value)


def test_unregister_without_registration(registration_service, make_activity, spots_of):
    activity_id = make_activity(spots=3)

    with pytest.raises(NotRegistered):
        registration_service.unregister(USER_A, activity_id)

    assert spots_of(activity_id) == 3


def test_unregister_twice(registration_service, make_activity, spots_of):
    activity_id = make_activity(spots=3)
    registration_service.sign_up(USER_A, activity_id)
    registration_service.unregister(USER_A, activity_id)

    with pytest.raises(NotRegistered):
        registration_service.unregister(USER_A, activity_id)
    assert spots_of(activity_id) == 3


def test_unregister_frees_the_day(registration_service, make_activity):
    first = make_activity(day=4)
    second = make_activity(day=4)
    registration_service.sign_up(USER_A, first)
    registration_service.unregister(USER_A, first)

    assert registration_service.sign_up(USER_A, second) is True


def test_failed_write_leaves_no_registration(registration_service, make_activity, spots_of, database, monkeypatch):
    activity_id = make_activity(spots=2)

    def broken_adjust(conn, activity_id, delta):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(activities_crud, "adjust_spots", broken_adjust)

    with pytest.raises(StorageError) as exc_info:
        registration_service.sign_up(USER_A, activity_id)

    assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)
    assert registration_count(database, activity_id) == 0
    assert spots_of(activity_id) == 2


def test_spots_match_active_registrations(registration_service, make_activity, spots_of, database):
    initial = {
        make_activity(day=1, spots=2): 2,
        make_activity(day=1, spots=1): 1,
        make_activity(day=2, spots=3): 3,
    }
    ids = list(initial)
    users = [f"user-{n}" for n in range(5)]
    operations = [
        ("sign_up", 0, ids[0]), ("sign_up", 1, ids[0]), ("sign_up", 2, ids[0]),
        ("sign_up", 2, ids[1]), ("sign_up", 3, ids[1]), ("sign_up", 0, ids[1]),
        ("sign_up", 0, ids[2]), ("sign_up", 1, ids[2]), ("unregister", 0, ids[0]),
        ("sign_up", 3, ids[0]), ("unregister", 4, ids[2]), ("sign_up", 4, ids[2]),
        ("sign_up", 2, ids[2]), ("sign_up", 3, ids[2]), ("unregister", 1, ids[2]),
        ("sign_up", 3, ids[2]),
    ]
    for operation, user, activity_id in operations:
        try:
            getattr(registration_service, operation)(users[user], activity_id)
        except BusinessRuleError:
            pass

    for activity_id, initial_spots in initial.items():
        spots = spots_of(activity_id)
        assert spots >= 0
        assert spots == initial_spots - registration_count(database, activity_id)

    with database.connection() as conn:
        per_day = conn.execute(
            """
            SELECT r.user_id, a.day, COUNT(*) AS total
            FROM registrations r JOIN activities a ON a.id = r.activity_id
            GROUP BY r.user_id, a.day
            """
        ).fetchall()
    assert all(row["total"] == 1 for row in per_day)


def test_concurrent_signups_for_the_last_spot(registration_service, make_activity, spots_of):
    activity_id = make_activity(spots=1)
    barrier = threading.Barrier(2)
    outcomes = []
    lock = threading.Lock()

    def attempt(user_id):
        barrier.wait()
        try:
            result = registration_service.sign_up(user_id, activity_id)
        except NoSpotsAvailable as exc:
            result = exc
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=attempt, args=(user,)) for user in (USER_A, USER_B)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count(True) == 1
    assert sum(isinstance(o, NoSpotsAvailable) for o in outcomes) == 1
    assert spots_of(activity_id) == 0


def test_many_concurrent_signups_never_overbook(registration_service, make_activity, spots_of, database):
    activity_id = make_activity(spots=3)
    users = [f"racer-{n}" for n in range(8)]
    barrier = threading.Barrier(len(users))
    successes = []
    rejected = []

    def attempt(user_id):
        barrier.wait()
        try:
            registration_service.sign_up(user_id, activity_id)
            successes.append(user_id)
        except NoSpotsAvailable:
            rejected.append(user_id)

    threads = [threading.Thread(target=attempt, args=(user,)) for user in users]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(successes) == 3
    assert len(rejected) == 5
    assert spots_of(activity_id) == 0
    assert registration_count(database, activity_id) == 3

"""
Data access for the ``activities`` table.

Every function takes an open connection or ``Transaction`` as its first
argument so the same queries serve plain reads and atomic units.
"""

import sqlite3
from typing import List, Optional, Tuple

from ..schemas.activity import ActivityCreate, ActivityRead


ACTIVITY_COLUMNS = "a.id, a.spots, a.activity_type, a.room, a.speaker, a.topic, a.description, a.time, a.day"


def row_to_activity(row: sqlite3.Row) -> ActivityRead:
    return ActivityRead(
        id=row["id"],
        spots=row["spots"],
        activity_type=row["activity_type"],
        room=row["room"],
        speaker=row["speaker"],
        topic=row["topic"],
        description=row["description"],
        time=row["time"],
        day=row["day"],
    )


def fetch_all(conn) -> List[ActivityRead]:
    rows = conn.execute(f"SELECT {ACTIVITY_COLUMNS} FROM activities a ORDER BY a.id").fetchall()
    return [row_to_activity(row) for row in rows]


def fetch_one(conn, activity_id: int) -> Optional[ActivityRead]:
    row = conn.execute(
        f"SELECT {ACTIVITY_COLUMNS} FROM activities a WHERE a.id = ?",
        (activity_id,),
    ).fetchone()
    return row_to_activity(row) if row else None


def insert(conn, data: ActivityCreate) -> int:
    cursor = conn.execute(
        """
        INSERT INTO activities (spots, activity_type, room, speaker, topic, description, time, day)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            data.spots,
            data.activity_type,
            data.room,
            data.speaker,
            data.topic,
            data.description,
            data.time,
            data.day,
        ),
    )
    return cursor.lastrowid


def fetch_slot(conn, activity_id: int) -> Optional[Tuple[int, int]]:
    """Return ``(day, spots)`` for an activity, or ``None`` if it is absent."""
    row = conn.execute(
        "SELECT day, spots FROM activities WHERE id = ?",
        (activity_id,),
    ).fetchone()
    if not row:
        return None
    return row["day"], row["spots"]


def fetch_for_user(conn, user_id: str) -> List[ActivityRead]:
    """Activities the user is registered for, ordered by day then time."""
    rows = conn.execute(
        f"""
        SELECT {ACTIVITY_COLUMNS}
        FROM activities a
        JOIN registrations r ON a.id = r.activity_id
        WHERE r.user_id = ?
        ORDER BY a.day, a.time
        """,
        (user_id,),
    ).fetchall()
    return [row_to_activity(row) for row in rows]


def adjust_spots(conn, activity_id: int, delta: int) -> None:
    conn.execute(
        "UPDATE activities SET spots = spots + ? WHERE id = ?",
        (delta, activity_id),
    )

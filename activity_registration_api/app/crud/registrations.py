"""
Data access for the ``registrations`` table.
"""


def exists(conn, user_id: str, activity_id: int) -> bool:
    row = conn.execute(
        "SELECT EXISTS(SELECT 1 FROM registrations WHERE user_id = ? AND activity_id = ?) AS found",
        (user_id, activity_id),
    ).fetchone()
    return bool(row["found"])


def count_on_day(conn, user_id: str, day: int) -> int:
    """Number of the user's registrations for activities held on ``day``."""
    row = conn.execute(
        """
        SELECT COUNT(*) AS total
        FROM registrations r
        JOIN activities a ON r.activity_id = a.id
        WHERE r.user_id = ? AND a.day = ?
        """,
        (user_id, day),
    ).fetchone()
    return row["total"]


def insert(conn, user_id: str, activity_id: int) -> None:
    conn.execute(
        "INSERT INTO registrations (user_id, activity_id) VALUES (?, ?)",
        (user_id, activity_id),
    )


def delete(conn, user_id: str, activity_id: int) -> None:
    conn.execute(
        "DELETE FROM registrations WHERE user_id = ? AND activity_id = ?",
        (user_id, activity_id),
    )

"""
SQLite database integration and simple migration system.

``Database`` is the store handle passed to the services: it knows where
the database lives and hands out short-lived connections
(``connection``) for reads and atomic units (``transaction``) for
writes.  ``init_db`` applies migrations on application start and
``get_database`` exposes the application's handle to FastAPI routes.

Connections are opened in autocommit mode so that transaction
boundaries are explicit.  ``transaction`` starts with ``BEGIN
IMMEDIATE``, which takes the database write lock before the first read;
every check-then-write unit is therefore serialised against other
writers, and a concurrent unit waits up to ``timeout`` seconds for the
lock.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from fastapi import Request

from .config import settings
from .errors import StorageError


logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS activities (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            spots INTEGER NOT NULL CHECK (spots >= 0),
            activity_type TEXT NOT NULL DEFAULT '',
            room TEXT NOT NULL DEFAULT '',
            speaker TEXT NOT NULL DEFAULT '',
            topic TEXT NOT NULL DEFAULT '',
            description TEXT NOT NULL DEFAULT '',
            time TEXT NOT NULL DEFAULT '',
            day INTEGER NOT NULL
        );

        CREATE TABLE IF NOT EXISTS registrations (
            user_id TEXT NOT NULL,
            activity_id INTEGER NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(user_id, activity_id),
            FOREIGN KEY(activity_id) REFERENCES activities(id)
        );
        """,
    ),
    # Migration 2: indices for the per-user and per-day lookups done on
    # every signup
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_registrations_user_id ON registrations(user_id);
        CREATE INDEX IF NOT EXISTS idx_activities_day ON activities(day);
        """,
    ),
]


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; relative paths are resolved against
    the project root (the directory containing the package).
    """
    db_url = database_url or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


class Transaction:
    """An open atomic unit.

    Statements run through ``execute``; nothing is persisted until
    ``commit`` is called.  Leaving the ``Database.transaction`` block
    without committing rolls everything back.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self.committed = False

    def execute(self, sql: str, parameters: tuple = ()) -> sqlite3.Cursor:
        return self._conn.execute(sql, parameters)

    def commit(self) -> None:
        self._conn.execute("COMMIT")
        self.committed = True


class Database:
    """Handle to one SQLite database file."""

    def __init__(self, path: str, timeout: float = 5.0) -> None:
        self.path = path
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "Database":
        return cls(get_database_path(), timeout=settings.database_timeout)

    def connect(self) -> sqlite3.Connection:
        """Open a new connection.

        Rows are returned as ``sqlite3.Row`` so columns can be accessed
        by name.  Foreign key enforcement is off by default in SQLite
        and has to be enabled per connection.
        """
        conn = sqlite3.connect(self.path, timeout=self.timeout, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection for reads and close it on exit."""
        conn = None
        try:
            conn = self.connect()
            yield conn
        except sqlite3.Error as exc:
            logger.error("Database error on %s: %s", self.path, exc)
            raise StorageError(f"database error: {exc}") from exc
        finally:
            if conn is not None:
                conn.close()

    @contextmanager
    def transaction(self) -> Iterator[Transaction]:
        """Yield an atomic unit holding the database write lock.

        Any exception raised inside the block propagates after the
        rollback; driver errors are re-raised as ``StorageError``.
        """
        conn = None
        try:
            conn = self.connect()
            conn.execute("BEGIN IMMEDIATE")
            yield Transaction(conn)
        except sqlite3.Error as exc:
            logger.error("Transaction on %s failed: %s", self.path, exc)
            raise StorageError(f"transaction failed: {exc}") from exc
        finally:
            if conn is not None:
                try:
                    if conn.in_transaction:
                        conn.execute("ROLLBACK")
                except sqlite3.Error:
                    logger.exception("Rollback on %s failed", self.path)
                finally:
                    conn.close()


def init_db(database: Database) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entries of
    ``MIGRATIONS``.  Safe to call on every start.
    """
    with database.connection() as conn:
        conn.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = conn.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                conn.executescript(sql)
                conn.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                logger.info("Applied migration %s to %s", version, database.path)
                current_version = version


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the application's store handle."""
    return request.app.state.database

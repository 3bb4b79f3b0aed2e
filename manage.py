#!/usr/bin/env python3
"""
Administrative command line for the Activity Registration API database.

Usage:
    python manage.py --db ./activities.db init-db
    python manage.py create-activity --spots 40 --day 2 --time 14:00 --topic "Intro to Go"
    python manage.py list-activities
    python manage.py user-activities --user 8d6c1f0e-...
    python manage.py issue-token --user 8d6c1f0e-... [--admin] [--days 7]

Without ``--db`` the database configured by ``DATABASE_URL`` is used.
Migrations are applied before every command.
"""

import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError

from activity_registration_api.app.core.db import Database, get_database_path, init_db
from activity_registration_api.app.core.errors import StorageError
from activity_registration_api.app.core.config import settings
from activity_registration_api.app.core.security import ADMIN_ROLE, create_access_token
from activity_registration_api.app.schemas.activity import ActivityCreate
from activity_registration_api.app.services.activity_service import ActivityService


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Manage the activity registration database.")
    ap.add_argument("--db", help="Path to SQLite DB file (defaults to DATABASE_URL)")
    commands = ap.add_subparsers(dest="command", required=True)

    commands.add_parser("init-db", help="Create the database and apply migrations")

    create = commands.add_parser("create-activity", help="Add a new activity")
    create.add_argument("--spots", type=int, required=True, help="Number of seats")
    create.add_argument("--day", type=int, required=True, help="Day of the event the activity runs on")
    create.add_argument("--time", default="", help="Start time, e.g. 14:00")
    create.add_argument("--type", dest="activity_type", default="", help="Activity type, e.g. talk or workshop")
    create.add_argument("--room", default="")
    create.add_argument("--speaker", default="")
    create.add_argument("--topic", default="")
    create.add_argument("--description", default="")

    commands.add_parser("list-activities", help="Print every activity")

    mine = commands.add_parser("user-activities", help="Print the activities a user is registered for")
    mine.add_argument("--user", required=True, help="User identifier (UUID)")

    token = commands.add_parser("issue-token", help="Print a bearer token for a user")
    token.add_argument("--user", required=True, help="User identifier (UUID) placed in the 'sub' claim")
    token.add_argument("--admin", action="store_true", help="Grant administrative access")
    token.add_argument("--days", type=int, default=None, help="Token lifetime in days")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "issue-token":
        claims = {"sub": args.user}
        if args.admin:
            claims["role"] = ADMIN_ROLE
        expires = args.days * 24 * 60 * 60 if args.days is not None else None
        print(create_access_token(claims, expires_delta=expires))
        return 0

    database = Database(get_database_path(args.db), timeout=settings.database_timeout)
    service = ActivityService(database)
    try:
        init_db(database)
        if args.command == "init-db":
            print(f"[+] Database ready: {database.path}")
        elif args.command == "create-activity":
            activity_id = service.create_activity(
                ActivityCreate(
                    spots=args.spots,
                    activity_type=args.activity_type,
                    room=args.room,
                    speaker=args.speaker,
                    topic=args.topic,
                    description=args.description,
                    time=args.time,
                    day=args.day,
                )
            )
            print(f"[+] Created activity {activity_id}")
        elif args.command == "list-activities":
            for activity in service.list_activities():
                print(activity)
                print()
        elif args.command == "user-activities":
            for activity in service.list_user_activities(args.user):
                print(activity)
                print()
    except ValidationError as exc:
        print(f"[!] Invalid activity: {exc}", file=sys.stderr)
        return 2
    except StorageError as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Prepare the Filmorate SQLite database outside of the API process.

``init`` applies pending migrations and seeds the MPA ratings and
genres; it is safe to run repeatedly.  ``stats`` prints how many
rows the main tables hold.

Usage:
    python manage_db.py init --db ./filmorate.db
    python manage_db.py stats --db ./filmorate.db
"""

import argparse
import os
import sys

from filmorate_api.app.core.db import get_cursor, get_database_path, init_db


TABLES = ("users", "films", "genres", "mpa_ratings", "likes", "friendships")


def cmd_init(db_path: str) -> int:
    init_db(db_path)
    print(f"[+] Database ready: {db_path}")
    return 0


def cmd_stats(db_path: str) -> int:
    if not os.path.exists(db_path):
        print(f"[!] DB not found: {db_path}", file=sys.stderr)
        return 1
    with get_cursor(db_path) as cursor:
        for table in TABLES:
            row = cursor.execute(f"SELECT COUNT(*) AS count FROM {table}").fetchone()
            print(f"{table}: {row['count']}")
    return 0


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Manage the Filmorate SQLite database.")
    ap.add_argument("command", choices=("init", "stats"))
    ap.add_argument("--db", help="Path to SQLite DB file (defaults to DATABASE_URL)")
    args = ap.parse_args(argv)

    db_path = get_database_path(args.db)
    if args.command == "init":
        return cmd_init(db_path)
    return cmd_stats(db_path)


if __name__ == "__main__":
    sys.exit(main())

"""
SQLite layer for the dashboard.

Local stand-in for the hosted backend: same two tables, same queries, kept on
disk so data survives restarts.
"""

from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime
from typing import List, Set

from life_os.metrics import day_window, to_iso
from life_os.models import Habit
from life_os.store import RemoteError, parse_rows

logger = logging.getLogger(__name__)

DB_PATH_DEFAULT = os.path.join("data", "habits.db")


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


@contextmanager
def connect(db_path: str = DB_PATH_DEFAULT):
    _ensure_parent_dir(db_path)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def init_db(db_path: str = DB_PATH_DEFAULT) -> None:
    """
    Create tables if they don't exist yet.
    """
    with connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS habits (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                created_at TEXT NOT NULL            -- UTC ISO-8601, microseconds
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS checkins (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                habit_id INTEGER NOT NULL,
                day TEXT NOT NULL,                  -- local YYYY-MM-DD of completed_at
                completed_at TEXT NOT NULL,
                UNIQUE(habit_id, day),
                FOREIGN KEY (habit_id) REFERENCES habits(id) ON DELETE CASCADE
            )
            """
        )


def create_habit(name: str, created_at: datetime, db_path: str = DB_PATH_DEFAULT) -> str:
    """
    Seed a habit. The dashboard itself never writes habits.
    """
    with connect(db_path) as conn:
        cursor = conn.execute(
            "INSERT INTO habits (name, created_at) VALUES (?, ?)",
            (name.strip(), to_iso(created_at)),
        )
    return str(cursor.lastrowid)


class SqliteHabitStore:
    """
    `HabitStore` backed by a local SQLite file.

    At most one check-in per (habit, local day) is enforced by the schema;
    inserting a second one for the same day keeps the first.
    """

    def __init__(self, db_path: str = DB_PATH_DEFAULT, create: bool = True) -> None:
        self.db_path = db_path
        if create:
            init_db(db_path)

    def list_habits(self) -> List[Habit]:
        try:
            with connect(self.db_path) as conn:
                rows = conn.execute(
                    "SELECT id, name, created_at FROM habits ORDER BY created_at, id"
                ).fetchall()
        except sqlite3.Error as e:
            raise self._remote_error("list habits", e) from e
        return parse_rows(Habit.from_row, rows, "habits")

    def list_today_checkin_habit_ids(self, day: date) -> Set[str]:
        start, end = day_window(day)
        try:
            with connect(self.db_path) as conn:
                rows = conn.execute(
                    """
                    SELECT DISTINCT habit_id
                      FROM checkins
                     WHERE completed_at >= ? AND completed_at <= ?
                    """,
                    (to_iso(start), to_iso(end)),
                ).fetchall()
        except sqlite3.Error as e:
            raise self._remote_error("list check-ins", e) from e
        return {str(r["habit_id"]) for r in rows}

    def insert_checkin(self, habit_id: str, at: datetime) -> None:
        local_day = at.astimezone().date().isoformat()
        try:
            with connect(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT INTO checkins (habit_id, day, completed_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(habit_id, day) DO NOTHING
                    """,
                    (habit_id, local_day, to_iso(at)),
                )
        except sqlite3.Error as e:
            raise self._remote_error("insert check-in", e) from e

    def delete_today_checkins(self, habit_id: str, day: date) -> None:
        start, end = day_window(day)
        try:
            with connect(self.db_path) as conn:
                conn.execute(
                    """
                    DELETE FROM checkins
                     WHERE habit_id = ?
                       AND completed_at >= ? AND completed_at <= ?
                    """,
                    (habit_id, to_iso(start), to_iso(end)),
                )
        except sqlite3.Error as e:
            raise self._remote_error("delete check-ins", e) from e

    def _remote_error(self, action: str, exc: sqlite3.Error) -> RemoteError:
        logger.error("SQLite: could not %s (%s): %s", action, self.db_path, exc)
        return RemoteError(str(exc))

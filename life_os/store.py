"""
Storage interface shared by the backends.

The dashboard and the toggle controller only talk to `HabitStore`; the SQLite
and Supabase implementations sit in `db.py` and `supabase_store.py`.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Iterable, List, Protocol, Set, TypeVar

from life_os.models import Habit

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RemoteError(Exception):
    """
    Any failed backend call. `message` is meant for the user.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def parse_rows(parse: Callable[[Any], T], rows: Iterable[Any], table: str) -> List[T]:
    """
    Turn backend rows into records. A malformed row fails the whole call.
    """
    try:
        return [parse(row) for row in rows]
    except (KeyError, TypeError, ValueError) as e:
        logger.error("Malformed %s row: %r", table, e)
        raise RemoteError(f"Malformed {table} row: {e}") from e


class HabitStore(Protocol):
    def list_habits(self) -> List[Habit]:
        """Habits ordered by created_at, oldest first. Empty is a valid result."""
        ...

    def list_today_checkin_habit_ids(self, day: date) -> Set[str]:
        """Distinct habit ids with a check-in inside the day window of `day`."""
        ...

    def insert_checkin(self, habit_id: str, at: datetime) -> None: ...

    def delete_today_checkins(self, habit_id: str, day: date) -> None:
        """Remove every check-in of `habit_id` inside the day window of `day`."""
        ...

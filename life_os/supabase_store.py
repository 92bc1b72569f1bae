"""
Supabase (PostgREST) backend.

Tables are managed in the Supabase project:
    habits(id, name, created_at)
    checkins(habit_id, completed_at)
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, List, Set

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from life_os.metrics import day_window, to_iso
from life_os.models import CheckIn, Habit
from life_os.store import RemoteError, parse_rows

logger = logging.getLogger(__name__)

HABITS_TABLE = "habits"
CHECKINS_TABLE = "checkins"


class SupabaseHabitStore:
    def __init__(self, client: Client) -> None:
        self.client = client

    @classmethod
    def from_credentials(cls, url: str, key: str) -> "SupabaseHabitStore":
        return cls(create_client(url, key))

    def list_habits(self) -> List[Habit]:
        response = self._run(
            "list habits",
            lambda: self.client.table(HABITS_TABLE)
            .select("id,name,created_at")
            .order("created_at", desc=False)
            .execute(),
        )
        return parse_rows(Habit.from_row, response.data or [], HABITS_TABLE)

    def list_today_checkin_habit_ids(self, day: date) -> Set[str]:
        start, end = day_window(day)
        response = self._run(
            "list check-ins",
            lambda: self.client.table(CHECKINS_TABLE)
            .select("habit_id, completed_at")
            .gte("completed_at", to_iso(start))
            .lte("completed_at", to_iso(end))
            .execute(),
        )
        checkins = parse_rows(CheckIn.from_row, response.data or [], CHECKINS_TABLE)
        return {c.habit_id for c in checkins}

    def insert_checkin(self, habit_id: str, at: datetime) -> None:
        self._run(
            "insert check-in",
            lambda: self.client.table(CHECKINS_TABLE)
            .insert({"habit_id": habit_id, "completed_at": to_iso(at)})
            .execute(),
        )

    def delete_today_checkins(self, habit_id: str, day: date) -> None:
        start, end = day_window(day)
        self._run(
            "delete check-ins",
            lambda: self.client.table(CHECKINS_TABLE)
            .delete()
            .eq("habit_id", habit_id)
            .gte("completed_at", to_iso(start))
            .lte("completed_at", to_iso(end))
            .execute(),
        )

    def _run(self, action: str, call: Callable[[], Any]) -> Any:
        try:
            return call()
        except APIError as e:
            message = e.message or str(e)
            logger.error("Supabase: could not %s: %s", action, message)
            raise RemoteError(message) from e
        except httpx.HTTPError as e:
            logger.error("Supabase: could not %s: %s", action, e)
            raise RemoteError(str(e)) from e

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import List, Set

import pytest

from life_os.metrics import day_window
from life_os.models import CheckIn, Habit
from life_os.store import RemoteError

DAY = date(2026, 3, 14)


def local(day: date, hh: int = 12, mm: int = 0, ss: int = 0) -> datetime:
    return datetime.combine(day, time(hh, mm, ss)).astimezone()


def in_window(ts: datetime, day: date) -> bool:
    start, end = day_window(day)
    return start <= ts <= end


class InMemoryHabitStore:
    """
    HabitStore fake. Put a method name into `failing` to make it raise RemoteError.
    """

    def __init__(self, habits: List[Habit] = (), checkins: List[CheckIn] = ()) -> None:
        self.habits = list(habits)
        self.checkins = list(checkins)
        self.failing: Set[str] = set()
        self.calls: List[tuple] = []

    def _maybe_fail(self, name: str) -> None:
        if name in self.failing:
            raise RemoteError(f"{name} failed")

    def list_habits(self) -> List[Habit]:
        self.calls.append(("list_habits",))
        self._maybe_fail("list_habits")
        return sorted(self.habits, key=lambda h: h.created_at)

    def list_today_checkin_habit_ids(self, day: date) -> Set[str]:
        self.calls.append(("list_today_checkin_habit_ids", day))
        self._maybe_fail("list_today_checkin_habit_ids")
        return {c.habit_id for c in self.checkins if in_window(c.completed_at, day)}

    def insert_checkin(self, habit_id: str, at: datetime) -> None:
        self.calls.append(("insert_checkin", habit_id, at))
        self._maybe_fail("insert_checkin")
        self.checkins.append(CheckIn(habit_id=habit_id, completed_at=at))

    def delete_today_checkins(self, habit_id: str, day: date) -> None:
        self.calls.append(("delete_today_checkins", habit_id, day))
        self._maybe_fail("delete_today_checkins")
        self.checkins = [
            c for c in self.checkins if not (c.habit_id == habit_id and in_window(c.completed_at, day))
        ]


def habit(habit_id: str, name: str, minute: int = 0) -> Habit:
    return Habit(id=habit_id, name=name, created_at=datetime(2026, 1, 1, 9, minute, tzinfo=timezone.utc))


@pytest.fixture
def meditate() -> Habit:
    return habit("1", "Meditate")


@pytest.fixture
def store(meditate) -> InMemoryHabitStore:
    return InMemoryHabitStore(habits=[meditate])

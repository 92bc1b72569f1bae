"""
Loading the dashboard: habits first, then today's check-ins.

A failed habit load becomes a status line; a failed check-in load is logged
and the page carries on with nothing marked done.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, List

from life_os.metrics import executed_count, momentum
from life_os.models import Habit
from life_os.store import HabitStore, RemoteError

logger = logging.getLogger(__name__)

LOADING_STATUS = "Loading protocols…"
EMPTY_STATUS = "No protocols yet. Add some in Supabase."


@dataclass
class DashboardState:
    habits: List[Habit] = field(default_factory=list)
    done_ids: FrozenSet[str] = frozenset()
    status: str = LOADING_STATUS

    @property
    def momentum(self) -> int:
        return momentum(self.habits, self.done_ids)

    @property
    def executed(self) -> int:
        return executed_count(self.habits, self.done_ids)


def load_habits(store: HabitStore) -> tuple[List[Habit], str]:
    try:
        habits = store.list_habits()
    except RemoteError as e:
        return [], "Error: " + e.message
    return habits, ("" if habits else EMPTY_STATUS)


def load_today_checkins(store: HabitStore, day: date) -> FrozenSet[str]:
    try:
        return frozenset(store.list_today_checkin_habit_ids(day))
    except RemoteError as e:
        # Not fatal; the dashboard stays usable.
        logger.warning("Could not load check-ins for %s: %s", day.isoformat(), e.message)
        return frozenset()


def load_dashboard(store: HabitStore, day: date) -> DashboardState:
    habits, status = load_habits(store)
    done_ids = load_today_checkins(store, day)
    return DashboardState(habits=habits, done_ids=done_ids, status=status)

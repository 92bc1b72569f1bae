"""
Optimistic check-in toggle.

The local `done_ids` set changes first; the backend call follows. If the call
fails the change is undone and the user is told. Toggles of the same habit are
not serialized: if two overlap, whichever backend response lands last decides
the local state.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, FrozenSet, Iterable, Optional

from life_os.store import HabitStore, RemoteError

logger = logging.getLogger(__name__)

SAVE_FAILED = "Could not save check-in: "
REMOVE_FAILED = "Could not remove check-in: "


def _local_now() -> datetime:
    return datetime.now().astimezone()


class ToggleController:
    def __init__(
        self,
        store: HabitStore,
        day: date,
        done_ids: Iterable[str] = (),
        notify: Optional[Callable[[str], None]] = None,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self.store = store
        self.day = day
        self.notify = notify
        self.clock = clock
        self._done_ids = set(done_ids)

    @property
    def done_ids(self) -> FrozenSet[str]:
        return frozenset(self._done_ids)

    def is_done(self, habit_id: str) -> bool:
        return habit_id in self._done_ids

    def reset(self, done_ids: Iterable[str]) -> None:
        """
        Replace local state with what the store reported on the last load.
        """
        self._done_ids = set(done_ids)

    def toggle(self, habit_id: str) -> bool:
        """
        Flip `habit_id` between pending and done.

        Returns True when the backend accepted the change, False when it was
        rolled back.
        """
        was_done = habit_id in self._done_ids

        if was_done:
            self._done_ids.discard(habit_id)
        else:
            self._done_ids.add(habit_id)

        try:
            if was_done:
                self.store.delete_today_checkins(habit_id, self.day)
            else:
                self.store.insert_checkin(habit_id, self.clock())
        except RemoteError as e:
            if was_done:
                self._done_ids.add(habit_id)
                message = REMOVE_FAILED + e.message
            else:
                self._done_ids.discard(habit_id)
                message = SAVE_FAILED + e.message
            logger.warning("Toggle of habit %s rolled back: %s", habit_id, e.message)
            if self.notify:
                self.notify(message)
            return False

        logger.info("Habit %s marked %s for %s", habit_id, "pending" if was_done else "done", self.day)
        return True

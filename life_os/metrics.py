"""
Metrics and date logic: day keys, the daily window, momentum.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import AbstractSet, Optional, Sequence, Tuple

import pandas as pd

from life_os.models import Habit

DAY_START = time(0, 0, 0)
DAY_END = time(23, 59, 59)

STATUS_DONE = "EXECUTED"
STATUS_PENDING = "PENDING"


def today_key(now: Optional[datetime] = None) -> date:
    """
    Local calendar date. Computed once per load and reused for queries and deletes.
    """
    now = now or datetime.now()
    return now.date()


def day_window(day: date) -> Tuple[datetime, datetime]:
    """
    Inclusive [00:00:00, 23:59:59] of `day` in local wall-clock time.

    Both bounds carry the local UTC offset. Seconds within the last second of
    the day (23:59:59.x) fall outside the window.
    """
    start = datetime.combine(day, DAY_START).astimezone()
    end = datetime.combine(day, DAY_END).astimezone()
    return start, end


def to_iso(dt: datetime) -> str:
    """
    UTC ISO-8601 with fixed microsecond precision, so string order == time order.
    """
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")


def executed_count(habits: Sequence[Habit], done_ids: AbstractSet[str]) -> int:
    return sum(1 for h in habits if h.id in done_ids)


def momentum(habits: Sequence[Habit], done_ids: AbstractSet[str]) -> int:
    """
    Percentage of listed habits with a check-in today, rounded half up.
    """
    total = len(habits)
    if total == 0:
        return 0
    done = executed_count(habits, done_ids)
    return int(math.floor(done * 100 / total + 0.5))


def today_frame(habits: Sequence[Habit], done_ids: AbstractSet[str]) -> pd.DataFrame:
    """
    One row per habit for today's view.

    Columns:
      - id, name, created_at
      - done (bool)
      - status (EXECUTED/PENDING)
    """
    rows = []
    for h in habits:
        done = h.id in done_ids
        rows.append(
            {
                "id": h.id,
                "name": h.name,
                "created_at": h.created_at,
                "done": done,
                "status": STATUS_DONE if done else STATUS_PENDING,
            }
        )
    return pd.DataFrame(rows, columns=["id", "name", "created_at", "done", "status"])


def status_counts(habits: Sequence[Habit], done_ids: AbstractSet[str]) -> pd.DataFrame:
    """
    Executed vs pending totals, for the momentum chart.
    """
    done = executed_count(habits, done_ids)
    return pd.DataFrame(
        {
            "status": [STATUS_DONE, STATUS_PENDING],
            "count": [done, len(habits) - done],
        }
    )

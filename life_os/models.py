"""
Plain records for protocols (habits) and check-ins.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

import pandas as pd


def parse_timestamp(value: Any) -> datetime:
    """
    Accept a datetime or an ISO-8601 string ('Z' suffix, any fraction length).
    Naive values are local wall-clock time, same as `metrics.to_iso`.
    """
    ts = pd.Timestamp(value)
    if pd.isna(ts):
        raise ValueError(f"Missing timestamp: {value!r}")
    dt = ts.to_pydatetime()
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


@dataclass(frozen=True)
class Habit:
    id: str
    name: str
    created_at: datetime

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Habit":
        return cls(
            id=str(row["id"]),
            name=str(row["name"]),
            created_at=parse_timestamp(row["created_at"]),
        )


@dataclass(frozen=True)
class CheckIn:
    habit_id: str
    completed_at: datetime

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CheckIn":
        return cls(
            habit_id=str(row["habit_id"]),
            completed_at=parse_timestamp(row["completed_at"]),
        )

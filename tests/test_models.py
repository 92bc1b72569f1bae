from __future__ import annotations

from datetime import datetime, timezone

import pytest

from life_os.metrics import to_iso
from life_os.models import CheckIn, Habit, parse_timestamp


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2026-01-01T09:00:00Z", datetime(2026, 1, 1, 9, tzinfo=timezone.utc)),
        ("2026-01-01T09:00:00.1+00:00", datetime(2026, 1, 1, 9, 0, 0, 100000, tzinfo=timezone.utc)),
        ("2026-01-01T09:00:00.12345+00:00", datetime(2026, 1, 1, 9, 0, 0, 123450, tzinfo=timezone.utc)),
        ("2026-01-01T10:00:00+01:00", datetime(2026, 1, 1, 9, tzinfo=timezone.utc)),
    ],
)
def test_parse_timestamp_formats(text, expected):
    assert parse_timestamp(text) == expected


def test_naive_values_are_local_time_like_to_iso():
    naive = datetime(2026, 3, 14, 12, 30)

    parsed = parse_timestamp(naive)

    assert parsed.tzinfo is not None
    assert parsed == naive.astimezone()
    assert to_iso(parsed) == to_iso(naive)
    assert parse_timestamp("2026-03-14T12:30:00") == naive.astimezone()


def test_parse_timestamp_rejects_missing_value():
    with pytest.raises(ValueError):
        parse_timestamp(None)


def test_from_row_stringifies_ids():
    habit = Habit.from_row({"id": 7, "name": "Read", "created_at": "2026-01-01T09:00:00Z"})
    checkin = CheckIn.from_row({"habit_id": 7, "completed_at": "2026-01-01T09:00:00Z"})

    assert habit.id == "7"
    assert checkin.habit_id == "7"

from __future__ import annotations

import logging
from datetime import timedelta

from conftest import DAY, InMemoryHabitStore, habit, local

from life_os.dashboard import EMPTY_STATUS, load_dashboard
from life_os.models import CheckIn
from life_os.toggle import ToggleController


def test_scenario_a_nothing_done(store):
    state = load_dashboard(store, DAY)

    assert [h.name for h in state.habits] == ["Meditate"]
    assert state.done_ids == frozenset()
    assert state.momentum == 0
    assert state.status == ""


def test_scenario_b_toggle_reaches_full_momentum(store):
    state = load_dashboard(store, DAY)
    controller = ToggleController(store, DAY, state.done_ids, clock=lambda: local(DAY, 7))

    controller.toggle("1")

    assert controller.done_ids == {"1"}
    reloaded = load_dashboard(store, DAY)
    assert reloaded.done_ids == {"1"}
    assert reloaded.momentum == 100


def test_scenario_d_half_done():
    store = InMemoryHabitStore(
        habits=[habit("1", "Meditate"), habit("2", "Read", 1)],
        checkins=[CheckIn(habit_id="2", completed_at=local(DAY, 6))],
    )

    state = load_dashboard(store, DAY)

    assert state.momentum == 50
    assert state.executed == 1


def test_empty_habit_list_is_not_an_error():
    state = load_dashboard(InMemoryHabitStore(), DAY)

    assert state.habits == []
    assert state.status == EMPTY_STATUS
    assert state.momentum == 0


def test_habit_load_failure_becomes_status(store):
    store.failing.add("list_habits")

    state = load_dashboard(store, DAY)

    assert state.habits == []
    assert state.status == "Error: list_habits failed"
    assert ("list_today_checkin_habit_ids", DAY) in store.calls


def test_checkin_load_failure_is_logged_and_swallowed(store, caplog):
    store.failing.add("list_today_checkin_habit_ids")

    with caplog.at_level(logging.WARNING, logger="life_os.dashboard"):
        state = load_dashboard(store, DAY)

    assert state.done_ids == frozenset()
    assert state.status == ""
    assert "list_today_checkin_habit_ids failed" in caplog.text


def test_yesterdays_checkins_do_not_count(store):
    store.checkins.append(CheckIn(habit_id="1", completed_at=local(DAY - timedelta(days=1), 22)))

    assert load_dashboard(store, DAY).done_ids == frozenset()

"""
Life OS - Dashboard

Run with:
    streamlit run Dashboard.py
"""

from __future__ import annotations

import altair as alt
import streamlit as st

from life_os.config import ConfigError, load_settings, make_store, setup_logging
from life_os.dashboard import LOADING_STATUS, DashboardState, load_dashboard
from life_os.metrics import STATUS_DONE, STATUS_PENDING, status_counts, today_frame, today_key
from life_os.toggle import ToggleController
from life_os.ui_helpers import (
    app_header,
    protocol_button_label,
    queue_alert,
    show_pending_alert,
)


st.set_page_config(
    page_title="Life OS",
    page_icon="⚡",
    layout="centered",
)


@st.cache_resource
def get_store():
    settings = load_settings()
    setup_logging(settings.log_level)
    return make_store(settings)


def refresh() -> None:
    """
    Reload habits and today's check-ins; local done state is replaced.
    """
    store = get_store()
    day = st.session_state.setdefault("day", today_key())
    with st.spinner(LOADING_STATUS):
        state = load_dashboard(store, day)
    st.session_state["state"] = state

    controller = st.session_state.get("controller")
    if controller is None:
        controller = ToggleController(store, day, notify=queue_alert)
        st.session_state["controller"] = controller
    controller.reset(state.done_ids)


def render_momentum(state: DashboardState, done_ids: frozenset[str]) -> None:
    # done_ids moves with each toggle; state holds the last load
    live = DashboardState(habits=state.habits, done_ids=done_ids, status=state.status)
    total = len(live.habits)

    c1, c2 = st.columns([0.5, 0.5])
    with c1:
        st.metric("MOMENTUM", f"{live.momentum}%")
        st.caption(f"{live.executed}/{total} executed")
    with c2:
        if total:
            chart = (
                alt.Chart(status_counts(state.habits, done_ids))
                .mark_arc(innerRadius=40)
                .encode(
                    theta=alt.Theta("count:Q"),
                    color=alt.Color(
                        "status:N",
                        scale=alt.Scale(domain=[STATUS_DONE, STATUS_PENDING], range=["#78ffb4", "#3a3a46"]),
                        legend=None,
                    ),
                    tooltip=["status:N", "count:Q"],
                )
                .properties(height=140)
            )
            st.altair_chart(chart, use_container_width=True)


def render_protocols(state: DashboardState, controller: ToggleController) -> None:
    head, button = st.columns([0.75, 0.25])
    with head:
        st.subheader("PROTOCOLS")
    with button:
        if st.button("Refresh"):
            refresh()
            st.rerun()

    if state.status:
        st.caption(state.status)

    frame = today_frame(state.habits, controller.done_ids)
    for row in frame.itertuples(index=False):
        if st.button(
            protocol_button_label(row.name, row.done),
            key=f"toggle_{row.id}",
            use_container_width=True,
            type="primary" if row.done else "secondary",
        ):
            controller.toggle(row.id)
            st.rerun()


def main() -> None:
    if "state" not in st.session_state:
        try:
            refresh()
        except ConfigError as e:
            st.error(f"Configuration error: {e}")
            st.stop()

    state: DashboardState = st.session_state["state"]
    controller: ToggleController = st.session_state["controller"]

    app_header("LIFE OPERATING SYSTEM", "Dashboard", f"Protocols for {controller.day.isoformat()}")
    show_pending_alert()

    render_momentum(state, controller.done_ids)
    st.divider()
    render_protocols(state, controller)

    st.divider()
    st.subheader("OPTIMIZATION")
    st.write(
        "Atomic Habits rule for today: make the next action **obvious** and **easy**. "
        "Reduce friction until “starting” feels inevitable."
    )


if __name__ == "__main__":
    main()

"""
UI helpers for the Streamlit dashboard.

Keeping this separate keeps Dashboard.py about layout only.
"""

from __future__ import annotations

import streamlit as st

from life_os.metrics import STATUS_DONE, STATUS_PENDING


def app_header(kicker: str, title: str, subtitle: str | None = None) -> None:
    st.caption(kicker)
    st.title(title)
    if subtitle:
        st.caption(subtitle)


def status_label(done: bool) -> str:
    return STATUS_DONE if done else STATUS_PENDING


def protocol_button_label(name: str, done: bool) -> str:
    mark = "✅" if done else "⬜"
    return f"{mark} {name} · {status_label(done)}"


def queue_alert(msg: str) -> None:
    """
    Toggle failures trigger a rerun, so the alert is kept for the next pass.
    """
    st.session_state["last_alert"] = msg


def show_pending_alert() -> None:
    msg = st.session_state.pop("last_alert", None)
    if msg:
        st.error(msg, icon="⚠️")

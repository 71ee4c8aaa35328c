from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Optional

import streamlit as st

from premier.charts import ChartOptions, ChartSurface, build_chart
from premier.filters import DEFAULT_WINDOW, TimeWindow, normalize_window
from premier.views import ERROR, LOADING, ViewState


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .stApp {background-color: #e4e4e4;}
        .titletop {background-color: #ffffff;text-align: center;padding: 3vh 0 1vh;margin-bottom: 16px;
                   font-size: 1.4rem;font-weight: 700;color: #111827;
                   box-shadow: 66px 22px 42px 0px rgba(199, 199, 199, 0.05),
                               29px 10px 31px 0px rgba(199, 199, 199, 0.09),
                               7px 2px 17px 0px rgba(199, 199, 199, 0.1);}
        .card-title {font-weight: 600;font-size: 1.1rem;color: #111827;margin-bottom: 4px;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


def render_top_bar(title: str):
    st.markdown(f"<div class='titletop'>{title}</div>", unsafe_allow_html=True)


@contextmanager
def card(title: str):
    container = st.container(border=True)
    container.markdown(f"<div class='card-title'>{title}</div>", unsafe_allow_html=True)
    with container:
        yield container


def window_picker(key: str, default: Optional[TimeWindow] = None) -> TimeWindow:
    """Start/end date+time pickers for one view; values persist under ``key``."""
    default = default or DEFAULT_WINDOW
    c1, c2 = st.columns(2)
    with c1:
        start_date = st.date_input("Start date", value=default.start.date(), key=f"{key}_start_date")
        start_time = st.time_input("Start time", value=default.start.time(), step=60, key=f"{key}_start_time")
    with c2:
        end_date = st.date_input("End date", value=default.end.date(), key=f"{key}_end_date")
        end_time = st.time_input("End time", value=default.end.time(), step=60, key=f"{key}_end_time")
    return normalize_window({"start": (start_date, start_time), "end": (end_date, end_time)}, default=default)


def format_window(window: TimeWindow) -> str:
    fmt = "%Y-%m-%d %H:%M"
    return f"{window.start.strftime(fmt)} → {window.end.strftime(fmt)}"


def render_view(state: ViewState, surface: ChartSurface, status_slot: Any, options: Optional[ChartOptions] = None):
    """Draw one view's state: a placeholder message or its chart.

    Returns the chart that was drawn, or ``None``.
    """
    if state.status == LOADING:
        status_slot.info("Loading...")
        return None
    if state.status == ERROR:
        surface.destroy()
        status_slot.error(f"Error: {state.error}")
        return None

    chart = build_chart(state.dataset, options) if state.dataset is not None else None
    if chart is None:
        surface.destroy()
        status_slot.info("No data in the selected time range.")
        return None
    status_slot.empty()
    surface.draw(chart)
    return chart

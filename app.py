import logging

import streamlit as st

from premier.charts import ChartSurface, init_charts
from premier.config import SOURCE, configure_logging
from premier.dashboard import Dashboard
from premier.filters import DEFAULT_WINDOW
from premier_ui.components import card, format_window, inject_base_styles, render_top_bar, render_view, window_picker

logger = logging.getLogger(__name__)


def get_dashboard() -> Dashboard:
    # Views live in the session so their request generations survive reruns.
    if "dashboard" not in st.session_state:
        st.session_state["dashboard"] = Dashboard.from_config(SOURCE)
    return st.session_state["dashboard"]


# ---------- UI setup ----------
st.set_page_config(page_title="Premier Test", layout="wide")
configure_logging()
init_charts()
inject_base_styles()
render_top_bar("Premier Test")

dashboard = get_dashboard()

windows = {}
slots = {}
for view in dashboard.views:
    with card(view.spec.title):
        window = window_picker(view.key, DEFAULT_WINDOW)
        windows[view.key] = window
        st.caption(format_window(window))
        status_slot = st.empty()
        status_slot.info("Loading...")
        slots[view.key] = (status_slot, ChartSurface(st.empty()))

states = dashboard.refresh_all(windows)
for key, state in states.items():
    status_slot, surface = slots[key]
    render_view(state, surface, status_slot)
logger.debug("Rendered %d views", len(states))

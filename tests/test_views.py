"""
Tests for chart view state, request generations and end-to-end rendering.
"""

from datetime import datetime
from unittest.mock import MagicMock, Mock, patch

import pandas as pd

from premier.charts import ChartSurface
from premier.config import CHART_VIEWS, DATE_COLUMN, PHASE_COLUMNS
from premier.data import SourceError, load_rows
from premier.filters import DEFAULT_WINDOW, TimeWindow
from premier.pipeline import ChartDataset
from premier.views import ERROR, LOADING, READY, ChartView
from premier_ui.components import render_view
from tests.conftest import to_serial


HT_CURRENT = CHART_VIEWS[0]


def _render(state):
    status_slot = MagicMock()
    chart_slot = MagicMock()
    chart = render_view(state, ChartSurface(chart_slot), status_slot)
    return chart, status_slot, chart_slot


def test_initial_state_is_loading():
    view = ChartView(HT_CURRENT, "unused", loader=Mock())
    assert view.state.status == LOADING

    chart, status_slot, chart_slot = _render(view.state)
    assert chart is None
    status_slot.info.assert_called_once_with("Loading...")
    chart_slot.altair_chart.assert_not_called()


def test_refresh_success(phase_rows):
    view = ChartView(HT_CURRENT, "source", loader=Mock(return_value=phase_rows))
    state = view.refresh(DEFAULT_WINDOW)

    assert state.status == READY
    assert state.has_chart
    assert state.generation == 1
    view.loader.assert_called_once_with("source")

    chart, status_slot, chart_slot = _render(state)
    assert chart is not None
    chart_slot.altair_chart.assert_called_once()


def test_stale_result_is_dropped():
    view = ChartView(HT_CURRENT, "source", loader=Mock())
    old = view.begin()
    new = view.begin()
    newer_data = ChartDataset(title="new", kind="line", labels=["a"])

    assert view.complete(new, newer_data)
    assert not view.complete(old, ChartDataset(title="old", kind="line"))
    assert not view.fail(old, "late failure")
    assert view.state.dataset is newer_data
    assert view.state.status == READY


def test_failure_keeps_view_isolated():
    view = ChartView(HT_CURRENT, "source", loader=Mock(side_effect=ValueError("bad workbook")))
    state = view.refresh(DEFAULT_WINDOW)

    assert state.status == ERROR
    assert state.error == "bad workbook"
    assert not state.has_chart


def test_http_404_shows_error_and_no_chart():
    view = ChartView(HT_CURRENT, "http://dashboard.local/Assets/Htdata.xlsx", loader=load_rows)
    with patch("premier.data.requests.get", return_value=Mock(ok=False, status_code=404)):
        state = view.refresh(DEFAULT_WINDOW)

    chart, status_slot, chart_slot = _render(state)

    assert state.status == ERROR
    assert chart is None
    (message,), _ = status_slot.error.call_args
    assert message.startswith("Error: ")
    assert "404" in message
    chart_slot.altair_chart.assert_not_called()


def test_rows_outside_window_render_nothing(tmp_path):
    rows = pd.DataFrame(
        {
            DATE_COLUMN: [to_serial(datetime(2024, 7, 1, 9, 0)), to_serial(datetime(2024, 7, 1, 9, 5))],
            **{col: [1.0, 2.0] for col in PHASE_COLUMNS},
        }
    )
    path = tmp_path / "two_rows.xlsx"
    rows.to_excel(path, index=False)

    view = ChartView(HT_CURRENT, str(path))
    state = view.refresh(TimeWindow(datetime(2024, 7, 7, 11, 0), datetime(2024, 7, 7, 12, 0)))

    assert state.status == READY
    assert state.dataset.labels == []
    assert all(d.series.values == [] for d in state.dataset.datasets)

    chart, status_slot, chart_slot = _render(state)
    assert chart is None
    chart_slot.altair_chart.assert_not_called()
    status_slot.info.assert_called_once()


def test_corrupt_date_cell_does_not_break_the_view():
    rows = pd.DataFrame(
        {
            DATE_COLUMN: [to_serial(datetime(2024, 7, 7, 11, 30)), 1e12],
            **{col: [1.0, 2.0] for col in PHASE_COLUMNS},
        }
    )
    view = ChartView(HT_CURRENT, "source", loader=Mock(return_value=rows))
    state = view.refresh(DEFAULT_WINDOW)

    assert state.status == READY
    assert state.dataset.labels == ["7/7/2024, 11:30:00 AM"]
    assert state.has_chart


def test_error_after_chart_tears_chart_down(phase_rows):
    chart_slot = MagicMock()
    surface = ChartSurface(chart_slot)
    view = ChartView(HT_CURRENT, "source", loader=Mock(return_value=phase_rows))

    render_view(view.refresh(DEFAULT_WINDOW), surface, MagicMock())
    assert surface.is_drawn

    view.loader.side_effect = SourceError("HTTP error! status: 500", status=500)
    render_view(view.refresh(DEFAULT_WINDOW), surface, MagicMock())

    assert not surface.is_drawn
    chart_slot.empty.assert_called_once()

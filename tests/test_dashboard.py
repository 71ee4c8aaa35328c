"""
Tests for composing independent chart views.
"""

from datetime import datetime
from unittest.mock import patch

import pytest

from premier.config import CHART_VIEWS
from premier.dashboard import Dashboard
from premier.filters import TimeWindow
from premier.views import ERROR, READY, ChartView


def test_from_config_builds_three_views(phase_rows):
    dashboard = Dashboard.from_config("source", loader=lambda _: phase_rows)

    assert [v.key for v in dashboard.views] == ["ht_current", "ht_phase_balance", "feeder_stacked"]
    assert dashboard.view("feeder_stacked").spec.kind == "bar"
    with pytest.raises(KeyError):
        dashboard.view("missing")


def test_each_view_uses_its_own_window(phase_rows):
    dashboard = Dashboard.from_config("source", loader=lambda _: phase_rows)
    windows = {
        "ht_current": TimeWindow(datetime(2024, 7, 7, 11, 0), datetime(2024, 7, 7, 11, 0)),
        "ht_phase_balance": TimeWindow(datetime(2024, 7, 7, 0, 0), datetime(2024, 7, 8, 0, 0)),
    }
    states = dashboard.refresh_all(windows)

    assert len(states["ht_current"].dataset.labels) == 1
    assert len(states["ht_phase_balance"].dataset.labels) == len(phase_rows)
    # Unlisted views fall back to the default 11:00-12:00 window.
    assert len(states["feeder_stacked"].dataset.labels) == 3


def test_failure_in_one_view_does_not_affect_others(phase_rows):
    def loader(source):
        if source == "broken":
            raise ValueError("corrupt workbook")
        return phase_rows

    dashboard = Dashboard(
        [
            ChartView(CHART_VIEWS[0], "ok", loader=loader),
            ChartView(CHART_VIEWS[1], "broken", loader=loader),
            ChartView(CHART_VIEWS[2], "ok", loader=loader),
        ]
    )
    states = dashboard.refresh_all()

    assert states["ht_current"].status == READY
    assert states["ht_phase_balance"].status == ERROR
    assert states["feeder_stacked"].status == READY


def test_unexpected_refresh_error_is_contained(phase_rows):
    dashboard = Dashboard.from_config("source", loader=lambda _: phase_rows)
    with patch.object(dashboard.view("ht_current"), "refresh", side_effect=RuntimeError("boom")):
        states = dashboard.refresh_all()

    assert states["ht_current"].status == ERROR
    assert states["ht_current"].error == "boom"
    assert states["feeder_stacked"].status == READY


def test_duplicate_view_keys_rejected(phase_rows):
    view = ChartView(CHART_VIEWS[0], "source", loader=lambda _: phase_rows)
    with pytest.raises(ValueError):
        Dashboard([view, ChartView(CHART_VIEWS[0], "source")])


def test_generations_advance_per_view(phase_rows):
    dashboard = Dashboard.from_config("source", loader=lambda _: phase_rows)
    dashboard.refresh_all()
    states = dashboard.refresh_all()

    assert {s.generation for s in states.values()} == {2}

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from premier.config import CHART_VIEWS, SOURCE
from premier.data import load_rows
from premier.filters import DEFAULT_WINDOW, TimeWindow
from premier.series import ChartViewSpec
from premier.views import ERROR, ChartView, ViewState


logger = logging.getLogger(__name__)


class Dashboard:
    """Independent chart views laid out on one page.

    Views share nothing: each has its own window, state and surface, and a
    failure in one never reaches the others.
    """

    def __init__(self, views: Iterable[ChartView]):
        self.views: List[ChartView] = list(views)
        keys = [v.key for v in self.views]
        if len(set(keys)) != len(keys):
            raise ValueError(f"Duplicate view keys: {keys}")

    @classmethod
    def from_config(
        cls,
        source: str = SOURCE,
        specs: Iterable[ChartViewSpec] = CHART_VIEWS,
        loader: Callable[[str], pd.DataFrame] = load_rows,
    ) -> "Dashboard":
        return cls(ChartView(spec, source, loader=loader) for spec in specs)

    def view(self, key: str) -> ChartView:
        for v in self.views:
            if v.key == key:
                return v
        raise KeyError(key)

    def refresh_all(self, windows: Optional[Mapping[str, TimeWindow]] = None) -> Dict[str, ViewState]:
        """Refresh every view with its own window; one failing view never stops the rest."""
        windows = windows or {}
        states: Dict[str, ViewState] = {}
        for v in self.views:
            try:
                states[v.key] = v.refresh(windows.get(v.key, DEFAULT_WINDOW))
            except Exception as exc:
                logger.exception("View %s failed outside its refresh cycle", v.key)
                states[v.key] = ViewState(status=ERROR, error=str(exc), generation=v.state.generation)
        return states

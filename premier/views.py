from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

import pandas as pd

from premier.data import load_rows
from premier.filters import TimeWindow
from premier.pipeline import ChartDataset, build_chart_dataset
from premier.series import ChartViewSpec


logger = logging.getLogger(__name__)

LOADING = "loading"
ERROR = "error"
READY = "ready"


@dataclass(frozen=True)
class ViewState:
    status: str = LOADING
    dataset: Optional[ChartDataset] = None
    error: Optional[str] = None
    generation: int = 0

    @property
    def has_chart(self) -> bool:
        return self.status == READY and self.dataset is not None and not self.dataset.is_empty


class ChartView:
    """One chart's fetch -> filter -> dataset cycle.

    Every request gets a generation number; a result is applied only if it
    belongs to the latest request, so a slow earlier fetch cannot overwrite a
    newer window's data.
    """

    def __init__(self, spec: ChartViewSpec, source: str, loader: Callable[[str], pd.DataFrame] = load_rows):
        self.spec = spec
        self.source = source
        self.loader = loader
        self._generation = 0
        self._state = ViewState()

    @property
    def key(self) -> str:
        return self.spec.key

    @property
    def state(self) -> ViewState:
        return self._state

    def begin(self) -> int:
        self._generation += 1
        return self._generation

    def complete(self, token: int, dataset: ChartDataset) -> bool:
        if token != self._generation:
            logger.debug("View %s: dropping stale result %d (latest %d)", self.key, token, self._generation)
            return False
        self._state = ViewState(status=READY, dataset=dataset, generation=token)
        return True

    def fail(self, token: int, message: str) -> bool:
        if token != self._generation:
            logger.debug("View %s: dropping stale error %d (latest %d)", self.key, token, self._generation)
            return False
        # Keep the last good dataset around; the error placeholder replaces the chart.
        self._state = replace(self._state, status=ERROR, error=message, generation=token)
        return True

    def refresh(self, window: TimeWindow) -> ViewState:
        token = self.begin()
        try:
            rows = self.loader(self.source)
            dataset = build_chart_dataset(rows, self.spec, window)
        except Exception as exc:
            logger.exception("Error fetching or parsing Excel data for view %s", self.key)
            self.fail(token, str(exc))
        else:
            self.complete(token, dataset)
        return self.state

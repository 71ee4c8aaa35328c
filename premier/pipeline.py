from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from premier.colors import assign_colors
from premier.config import AGGREGATE_COLORS, CATEGORY_COLORS
from premier.dates import decode_timestamps, format_label
from premier.filters import TimeWindow, filter_rows
from premier.series import ChartViewSpec, NamedSeries, extract_series


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeriesStyle:
    series: NamedSeries
    color: str
    border_width: int = 2
    point_radius: int = 3
    point_hover_radius: int = 6
    tension: float = 0.4
    fill: bool = False

    @property
    def name(self) -> str:
        return self.series.name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.series.name,
            "data": list(self.series.values),
            "fill": self.fill,
            "borderColor": self.color,
            "backgroundColor": self.color,
            "borderWidth": self.border_width,
            "pointRadius": self.point_radius,
            "pointHoverRadius": self.point_hover_radius,
            "tension": self.tension,
        }


@dataclass(frozen=True)
class ChartDataset:
    title: str
    kind: str
    labels: List[str] = field(default_factory=list)
    datasets: List[SeriesStyle] = field(default_factory=list)
    stacked: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.labels

    def to_dict(self) -> Dict[str, Any]:
        return {"labels": list(self.labels), "datasets": [d.to_dict() for d in self.datasets]}

    def to_frame(self) -> pd.DataFrame:
        """Long form: one row per (label, series) with the label's position kept for ordering."""
        records = []
        for style in self.datasets:
            for idx, (label, value) in enumerate(zip(self.labels, style.series.values)):
                records.append({"idx": idx, "label": label, "series": style.name, "value": value})
        return pd.DataFrame(records, columns=["idx", "label", "series", "value"])


def build_chart_dataset(
    rows: pd.DataFrame,
    spec: ChartViewSpec,
    window: TimeWindow,
    *,
    category_colors: Optional[Mapping[str, str]] = None,
    fixed_colors: Optional[Mapping[str, str]] = None,
) -> ChartDataset:
    """Decode, filter, extract and colour one view's series."""
    category_colors = CATEGORY_COLORS if category_colors is None else category_colors
    fixed_colors = AGGREGATE_COLORS if fixed_colors is None else fixed_colors

    if spec.date_column not in rows.columns:
        raise KeyError(f"Date column {spec.date_column!r} not found in sheet")

    timestamps = decode_timestamps(rows[spec.date_column])
    kept, kept_ts = filter_rows(rows, window, timestamps)
    labels = [format_label(ts) for ts in kept_ts]
    logger.debug("View %s: %d of %d rows in window %s..%s", spec.key, len(kept), len(rows), window.start, window.end)

    series = extract_series(kept, spec, categories=category_colors.keys())
    colors = assign_colors([s.name for s in series], [s.category for s in series], category_colors, fixed_colors)
    datasets = [SeriesStyle(series=s, color=c) for s, c in zip(series, colors)]
    return ChartDataset(title=spec.title, kind=spec.kind, labels=labels, datasets=datasets, stacked=spec.stacked)

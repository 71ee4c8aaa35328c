from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import altair as alt

from premier.pipeline import ChartDataset


logger = logging.getLogger(__name__)

_initialised = False


def init_charts() -> None:
    """One-time Altair setup; call at application startup."""
    global _initialised
    if _initialised:
        return
    alt.data_transformers.disable_max_rows()
    _initialised = True
    logger.debug("Altair initialised")


@dataclass(frozen=True)
class ChartOptions:
    x_type: str = "ordinal"
    grid_color: str = "rgba(0, 0, 0, 0.05)"
    grid_dash: Tuple[int, ...] = (8, 4)
    max_ticks: int = 10
    legend_position: str = "bottom"
    tooltip_mode: str = "index"
    height: int = 360


def tick_values(labels, max_ticks: int):
    """Evenly skipped subset of labels so at most ``max_ticks`` are drawn."""
    if not labels or max_ticks <= 0:
        return list(labels)
    step = max(1, math.ceil(len(labels) / max_ticks))
    return list(labels[::step])


def build_chart(dataset: ChartDataset, options: Optional[ChartOptions] = None) -> Optional[alt.LayerChart]:
    """Altair chart for a dataset, or ``None`` when there is nothing to draw."""
    options = options or ChartOptions()
    if dataset.is_empty or not dataset.datasets:
        return None

    df = dataset.to_frame()
    names = [d.name for d in dataset.datasets]
    colors = [d.color for d in dataset.datasets]
    x_code = "O" if options.x_type == "ordinal" else "N"

    # Positions, not label text, so rows sharing a timestamp stay distinct.
    x = alt.X(
        f"idx:{x_code}",
        title=None,
        sort=None,
        axis=alt.Axis(
            values=tick_values(list(range(len(dataset.labels))), options.max_ticks),
            labelExpr=f"{json.dumps(list(dataset.labels))}[datum.value]",
            gridColor=options.grid_color,
            gridDash=list(options.grid_dash),
            labelAngle=-30,
        ),
    )
    color = alt.Color(
        "series:N",
        title=None,
        scale=alt.Scale(domain=names, range=colors),
        legend=alt.Legend(orient=options.legend_position),
    )
    base = alt.Chart(df).encode(x=x, color=color)

    if dataset.kind == "bar":
        y = alt.Y("value:Q", title=None, stack="zero" if dataset.stacked else None)
        marks = base.mark_bar().encode(y=y)
    else:
        style = dataset.datasets[0]
        y = alt.Y("value:Q", title=None, stack=None)
        marks = base.mark_line(
            point=alt.OverlayMarkDef(size=style.point_radius * style.point_radius * math.pi),
            interpolate="monotone" if style.tension else "linear",
            strokeWidth=style.border_width,
        ).encode(y=y)

    layers = [marks]
    if options.tooltip_mode == "index":
        # One rule per row carrying every series' value at that label.
        hover = alt.selection_point(fields=["idx"], nearest=True, on="mouseover", empty=False)
        rule = (
            alt.Chart(df)
            .transform_pivot("series", value="value", groupby=["idx", "label"])
            .mark_rule(color="gray")
            .encode(
                x=x,
                opacity=alt.condition(hover, alt.value(0.4), alt.value(0)),
                tooltip=[alt.Tooltip("label:N", title="Time")]
                + [alt.Tooltip(f"{name}:Q", title=name, format=".2f") for name in names],
            )
            .add_params(hover)
        )
        layers.append(rule)

    return alt.layer(*layers).properties(title=dataset.title, height=options.height)


def to_vega_spec(chart: alt.LayerChart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


class ChartSurface:
    """Owns the placeholder a view's chart is drawn into.

    The previous chart is always torn down before a new one is drawn.
    ``placeholder`` is anything with ``altair_chart`` and ``empty`` (a
    Streamlit ``st.empty()`` slot in the app).
    """

    def __init__(self, placeholder: Any):
        self._placeholder = placeholder
        self._chart = None

    @property
    def is_drawn(self) -> bool:
        return self._chart is not None

    def draw(self, chart: alt.LayerChart) -> None:
        self.destroy()
        self._placeholder.altair_chart(chart, use_container_width=True)
        self._chart = chart

    def destroy(self) -> None:
        if self._chart is None:
            return
        self._placeholder.empty()
        self._chart = None

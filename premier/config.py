from __future__ import annotations

import logging
from pathlib import Path

from premier.series import DATE_COLUMN, AggregateSpec, ChartViewSpec


BASE_DIR = Path(__file__).resolve().parents[1]

# Local path or an http(s) URL; only the first sheet is read.
SOURCE = str(BASE_DIR / "Assets" / "Htdata.xlsx")
FETCH_TIMEOUT = 20

PHASE_COLUMNS = (
    "HT_OG1_R_Current",
    "HT_OG1_Y_Current",
    "HT_OG1_B_Current",
    "HT_OG2_R_Current",
    "HT_OG2_Y_Current",
    "HT_OG2_B_Current",
)

CATEGORY_COLORS = {
    "R": "rgba(255, 0, 0, 1)",
    "Y": "rgba(245, 230, 83, 1)",
    "B": "rgba(0, 0, 255, 1)",
}

AGGREGATE_COLORS = {
    "HT_OG1_Avg_Current": "rgba(75, 192, 192, 1)",
    "HT_OG2_Avg_Current": "rgba(153, 102, 255, 1)",
    "R_Avg_Current": "rgba(255, 0, 0, 1)",
    "Y_Avg_Current": "rgba(245, 230, 83, 1)",
    "B_Avg_Current": "rgba(0, 0, 255, 1)",
}

CHART_VIEWS = (
    ChartViewSpec(
        key="ht_current",
        title="HT Current Chart",
        kind="line",
        date_column=DATE_COLUMN,
        columns=PHASE_COLUMNS,
        aggregates=(
            AggregateSpec("HT_OG1_Avg_Current", PHASE_COLUMNS[:3]),
            AggregateSpec("HT_OG2_Avg_Current", PHASE_COLUMNS[3:]),
        ),
    ),
    ChartViewSpec(
        key="ht_phase_balance",
        title="HT Phase Balance",
        kind="line",
        date_column=DATE_COLUMN,
        aggregates=(
            AggregateSpec("R_Avg_Current", ("HT_OG1_R_Current", "HT_OG2_R_Current")),
            AggregateSpec("Y_Avg_Current", ("HT_OG1_Y_Current", "HT_OG2_Y_Current")),
            AggregateSpec("B_Avg_Current", ("HT_OG1_B_Current", "HT_OG2_B_Current")),
        ),
    ),
    ChartViewSpec(
        key="feeder_stacked",
        title="Feeder Current (Stacked)",
        kind="bar",
        date_column=DATE_COLUMN,
        columns=PHASE_COLUMNS,
        stacked=True,
    ),
)

LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)

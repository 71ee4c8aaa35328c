from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Collection, List, Optional, Tuple

import pandas as pd


logger = logging.getLogger(__name__)

DATE_COLUMN = "DATE & TIME"


@dataclass(frozen=True)
class AggregateSpec:
    """Derived series: row-wise mean of ``columns``."""

    name: str
    columns: Tuple[str, ...]


@dataclass(frozen=True)
class ChartViewSpec:
    key: str
    title: str
    kind: str = "line"
    date_column: str = DATE_COLUMN
    columns: Tuple[str, ...] = ()
    aggregates: Tuple[AggregateSpec, ...] = ()
    category_token_index: int = 2
    stacked: bool = False


@dataclass(frozen=True)
class NamedSeries:
    name: str
    values: List[float] = field(default_factory=list)
    category: Optional[str] = None
    derived: bool = False


def column_category(column: str, categories: Collection[str], token_index: int = 2) -> Optional[str]:
    """Category token of a column name, e.g. ``HT_OG1_R_Current`` -> ``R``."""
    parts = str(column).split("_")
    if token_index >= len(parts):
        return None
    token = parts[token_index]
    return token if token in categories else None


def _values(column: pd.Series) -> List[float]:
    return pd.to_numeric(column, errors="coerce").astype(float).tolist()


def extract_series(rows: pd.DataFrame, spec: ChartViewSpec, categories: Collection[str]) -> List[NamedSeries]:
    """Named series for the tracked columns, then the aggregates.

    Tracked columns whose category is not in ``categories`` are logged and
    dropped; so are columns the sheet does not have.
    """
    out: List[NamedSeries] = []
    for col in spec.columns:
        category = column_category(col, categories, spec.category_token_index)
        if category is None:
            logger.error("Invalid category for column %s (view %s); series dropped", col, spec.key)
            continue
        if col not in rows.columns:
            logger.warning("Column %s missing from sheet (view %s); series dropped", col, spec.key)
            continue
        out.append(NamedSeries(name=col, values=_values(rows[col]), category=category))

    for agg in spec.aggregates:
        missing = [c for c in agg.columns if c not in rows.columns]
        if missing or not agg.columns:
            logger.warning("Aggregate %s missing columns %s (view %s); series dropped", agg.name, missing, spec.key)
            continue
        numeric = rows[list(agg.columns)].apply(pd.to_numeric, errors="coerce")
        mean = numeric.mean(axis=1, skipna=False) if not numeric.empty else pd.Series(dtype=float)
        out.append(NamedSeries(name=agg.name, values=mean.astype(float).tolist(), derived=True))
    return out

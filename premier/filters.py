from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Tuple

import pandas as pd


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive ``[start, end]`` window of naive timestamps."""

    start: datetime
    end: datetime

    @property
    def is_inverted(self) -> bool:
        return self.start > self.end

    def contains(self, ts: datetime) -> bool:
        if ts is None or pd.isna(ts):
            return False
        return self.start <= ts <= self.end

    def mask(self, timestamps: pd.Series) -> pd.Series:
        ts = pd.to_datetime(timestamps, errors="coerce")
        # NaT compares False on both sides, so undecodable rows never match.
        return (ts >= pd.Timestamp(self.start)) & (ts <= pd.Timestamp(self.end))


DEFAULT_WINDOW = TimeWindow(start=datetime(2024, 7, 7, 11, 0, 0), end=datetime(2024, 7, 7, 12, 0, 0))


def _as_datetime(value: object) -> Optional[datetime]:
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        if value.tzinfo is not None:
            value = value.tz_localize(None)
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, (tuple, list)) and len(value) == 2:
        d, t = value
        if isinstance(d, date) and isinstance(t, time):
            return datetime.combine(d, t.replace(tzinfo=None))
        return None
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            parsed = pd.Timestamp(s)
        except (ValueError, TypeError):
            return None
        if pd.isna(parsed):
            return None
        if parsed.tzinfo is not None:
            parsed = parsed.tz_localize(None)
        return parsed.to_pydatetime()
    return None


def normalize_window(raw: Optional[dict], *, default: Optional[TimeWindow] = None) -> TimeWindow:
    """Build a window from picker/session values, falling back per field.

    ``start`` and ``end`` may be datetimes, ISO strings or ``(date, time)``
    pairs. No ordering is enforced: an inverted window simply matches nothing.
    """
    default = default or DEFAULT_WINDOW
    raw = raw or {}
    start = _as_datetime(raw.get("start"))
    end = _as_datetime(raw.get("end"))
    return TimeWindow(start=start or default.start, end=end or default.end)


def filter_rows(rows: pd.DataFrame, window: TimeWindow, timestamps: pd.Series) -> Tuple[pd.DataFrame, pd.Series]:
    """Keep the rows whose timestamp falls inside ``window``.

    ``timestamps`` must be aligned with ``rows``. Both are cut with the same
    mask so every series derived afterwards has the same length as the labels.
    """
    if len(rows) != len(timestamps):
        raise ValueError(f"rows ({len(rows)}) and timestamps ({len(timestamps)}) are not aligned")
    if rows.empty:
        return rows.copy(), timestamps.copy()
    keep = window.mask(timestamps).to_numpy()
    return rows.loc[keep].copy(), timestamps.loc[keep].copy()

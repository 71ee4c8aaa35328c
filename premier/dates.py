from __future__ import annotations

import math
from datetime import datetime, timedelta

import numpy as np
import pandas as pd


# Days between the spreadsheet epoch (1899-12-30) and 1970-01-01.
EXCEL_EPOCH_OFFSET_DAYS = 25569
SECONDS_PER_DAY = 86400
FRACTION_EPSILON = 0.0000001

_UNIX_EPOCH = datetime(1970, 1, 1)

# Serials whose day lands inside the datetime64[ns] range; anything outside decodes to NaT.
MIN_SERIAL = (pd.Timestamp.min.date() - _UNIX_EPOCH.date()).days + 1 + EXCEL_EPOCH_OFFSET_DAYS
MAX_SERIAL = (pd.Timestamp.max.date() - _UNIX_EPOCH.date()).days - 1 + EXCEL_EPOCH_OFFSET_DAYS


def excel_serial_to_datetime(serial: float) -> datetime:
    """Convert a spreadsheet date serial (e.g. 45479.5) into a naive datetime.

    The integer part is the day, the fractional part the time of day. Values a
    hair under a whole second may land one second early; that is accepted.
    """
    if isinstance(serial, bool):
        raise ValueError(f"Not a spreadsheet date serial: {serial!r}")
    try:
        value = float(serial)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Not a spreadsheet date serial: {serial!r}") from exc
    if not math.isfinite(value):
        raise ValueError(f"Not a spreadsheet date serial: {serial!r}")

    whole_days = math.floor(value)
    try:
        day = _UNIX_EPOCH + timedelta(days=whole_days - EXCEL_EPOCH_OFFSET_DAYS)
    except OverflowError as exc:
        raise ValueError(f"Spreadsheet date serial out of range: {serial!r}") from exc

    fractional_day = value - whole_days + FRACTION_EPSILON
    total_seconds = math.floor(SECONDS_PER_DAY * fractional_day)
    hours = total_seconds // 3600
    minutes = (total_seconds - hours * 3600) // 60
    seconds = total_seconds % 60
    return day.replace(hour=hours, minute=minutes, second=seconds)


def decode_timestamps(values: pd.Series) -> pd.Series:
    """Vectorised decode of a date column.

    Cells already parsed as datetimes (openpyxl does this for date-formatted
    cells) pass through; numeric serials are decoded; anything else is NaT.
    """
    if values.empty:
        return pd.Series(pd.to_datetime([]), index=values.index, dtype="datetime64[ns]")
    if pd.api.types.is_datetime64_any_dtype(values):
        out = pd.to_datetime(values)
        if getattr(out.dt, "tz", None) is not None:
            out = out.dt.tz_localize(None)
        return out

    is_datetime_cell = values.apply(lambda v: isinstance(v, (datetime, pd.Timestamp)))
    numeric = pd.to_numeric(values.where(~is_datetime_cell), errors="coerce")
    numeric = numeric.where(np.isfinite(numeric) & numeric.between(MIN_SERIAL, MAX_SERIAL))

    whole_days = np.floor(numeric)
    fractional_day = numeric - whole_days + FRACTION_EPSILON
    total_seconds = np.floor(SECONDS_PER_DAY * fractional_day)
    decoded = (
        pd.Timestamp(_UNIX_EPOCH)
        + pd.to_timedelta(whole_days - EXCEL_EPOCH_OFFSET_DAYS, unit="D")
        + pd.to_timedelta(total_seconds, unit="s")
    )

    if is_datetime_cell.any():
        passthrough = pd.to_datetime(values.where(is_datetime_cell), errors="coerce")
        decoded = decoded.where(~is_datetime_cell, passthrough)
    return pd.to_datetime(decoded)


def format_label(ts: datetime) -> str:
    """Locale-style label, e.g. ``7/7/2024, 11:05:00 AM``."""
    if ts is None or pd.isna(ts):
        return ""
    hour12 = ts.hour % 12 or 12
    meridiem = "AM" if ts.hour < 12 else "PM"
    return f"{ts.month}/{ts.day}/{ts.year}, {hour12}:{ts.minute:02d}:{ts.second:02d} {meridiem}"

from datetime import datetime

import pandas as pd
import pytest

from premier.config import DATE_COLUMN, PHASE_COLUMNS


def to_serial(dt: datetime) -> float:
    delta = dt - datetime(1899, 12, 30)
    return delta.days + delta.seconds / 86400


@pytest.fixture
def phase_rows() -> pd.DataFrame:
    """Five readings around the default 11:00-12:00 window on 2024-07-07."""
    stamps = [
        datetime(2024, 7, 7, 10, 50),
        datetime(2024, 7, 7, 11, 0),
        datetime(2024, 7, 7, 11, 30),
        datetime(2024, 7, 7, 12, 0),
        datetime(2024, 7, 7, 12, 10),
    ]
    data = {DATE_COLUMN: [to_serial(s) for s in stamps]}
    for offset, col in enumerate(PHASE_COLUMNS):
        data[col] = [10.0 * (i + 1) + offset for i in range(len(stamps))]
    return pd.DataFrame(data)


@pytest.fixture
def xlsx_path(tmp_path, phase_rows):
    path = tmp_path / "Htdata.xlsx"
    phase_rows.to_excel(path, index=False)
    return path

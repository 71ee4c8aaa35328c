from __future__ import annotations

import io
import logging
from functools import lru_cache
from pathlib import Path
from typing import Tuple

import pandas as pd
import requests

from premier.config import FETCH_TIMEOUT


logger = logging.getLogger(__name__)


class SourceError(Exception):
    """The spreadsheet could not be fetched (missing file, network, non-2xx)."""

    def __init__(self, message: str, *, status: int | None = None):
        super().__init__(message)
        self.status = status


def is_url(source: str) -> bool:
    return str(source).lower().startswith(("http://", "https://"))


def file_signature(path: Path) -> Tuple[str, float]:
    return (str(path), path.stat().st_mtime)


def drop_duplicate_columns(df: pd.DataFrame) -> pd.DataFrame:
    return df.loc[:, ~df.columns.duplicated()]


def parse_first_sheet(content: bytes | io.BytesIO | Path | str) -> pd.DataFrame:
    """Parse the first worksheet into one row per record, keyed by header."""
    if isinstance(content, bytes):
        content = io.BytesIO(content)
    df = pd.read_excel(content, sheet_name=0, engine="openpyxl")
    df.columns = [str(c).strip() for c in df.columns]
    df = drop_duplicate_columns(df)
    return df.dropna(how="all").reset_index(drop=True)


def fetch_bytes(url: str, *, timeout: float = FETCH_TIMEOUT) -> bytes:
    try:
        r = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise SourceError(f"Network error: {exc}") from exc
    if not r.ok:
        raise SourceError(f"HTTP error! status: {r.status_code}", status=r.status_code)
    return r.content


@lru_cache(maxsize=4)
def _load_file_cached(signature: Tuple[str, float]) -> pd.DataFrame:
    path, _ = signature
    return parse_first_sheet(Path(path))


def load_rows(source: str) -> pd.DataFrame:
    """Fetch and parse the spreadsheet at ``source`` (path or URL).

    URLs are fetched on every call. Local files are re-parsed only when their
    mtime changes. Callers get their own copy of the frame.
    """
    if is_url(source):
        logger.info("Fetching %s", source)
        return parse_first_sheet(fetch_bytes(source))

    path = Path(source)
    if not path.exists():
        raise SourceError(f"File not found: {path}")
    return _load_file_cached(file_signature(path)).copy()

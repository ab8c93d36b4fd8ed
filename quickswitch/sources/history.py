"""Browsing history from a Chromium profile's `History` database."""

from __future__ import annotations

import contextlib
import sqlite3
from pathlib import Path
from typing import List, Optional

from quickswitch.picker.models import TimeWindow

from .base import BlockingSource, SourceError
from .profile import epoch_ms_to_webkit, resolve_profile_dir, webkit_to_epoch_ms

HISTORY_QUERY = (
    "SELECT url, COALESCE(title, ''), last_visit_time "
    "FROM urls "
    "WHERE hidden = 0 "
    "AND (title LIKE ? ESCAPE '\\' OR url LIKE ? ESCAPE '\\')"
)


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class HistorySource(BlockingSource):
    """Most recently visited URLs matching the query.

    The database is opened read-only and immutable so a running browser's
    lock does not block reads.
    """

    name = "history"

    def __init__(self, profile_dir: str | Path | None = None, db_path: str | Path | None = None):
        self.db_path = Path(db_path) if db_path else resolve_profile_dir(profile_dir) / "History"

    def search_blocking(self, query: str, count: int, time_window: Optional[TimeWindow]) -> List[dict]:
        if not self.db_path.is_file():
            raise SourceError(self.name, f"history database not found: {self.db_path}")

        sql = HISTORY_QUERY
        pattern = _like_pattern(query.strip())
        params: list = [pattern, pattern]
        if time_window is not None:
            sql += " AND last_visit_time BETWEEN ? AND ?"
            params += [epoch_ms_to_webkit(time_window.start_ms), epoch_ms_to_webkit(time_window.end_ms)]
        sql += " ORDER BY last_visit_time DESC LIMIT ?"
        params.append(count)

        uri = f"file:{self.db_path.as_posix()}?mode=ro&immutable=1"
        try:
            with contextlib.closing(sqlite3.connect(uri, uri=True, timeout=1.0)) as conn:
                rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise SourceError(self.name, f"{self.db_path.name}: {exc}") from exc

        return [
            {"url": url, "title": title, "lastVisitTime": webkit_to_epoch_ms(last_visit or 0)}
            for url, title, last_visit in rows
        ]

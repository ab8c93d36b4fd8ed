"""Source adapter contract and shared helpers."""

from __future__ import annotations

import asyncio
import json
import urllib.error
import urllib.request
from typing import List, Optional, Protocol

from quickswitch.picker.models import TimeWindow

USER_AGENT = "quickswitch/0.1"


class SourceError(RuntimeError):
    """Transport or platform failure inside one source adapter."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source


class SourceAdapter(Protocol):
    name: str

    async def search(self, query: str, *, count: int, time_window: Optional[TimeWindow] = None) -> List:
        """Return up to `count` raw items; an empty list when nothing matches."""
        ...


class BlockingSource:
    """Base for adapters backed by blocking I/O; work runs off the event loop."""

    name = "source"

    async def search(self, query: str, *, count: int, time_window: Optional[TimeWindow] = None) -> List:
        if count <= 0:
            return []
        return await asyncio.to_thread(self.search_blocking, query, count, time_window)

    def search_blocking(self, query: str, count: int, time_window: Optional[TimeWindow]) -> List:
        raise NotImplementedError


def fetch_json(url: str, *, source: str, timeout: float = 5.0, method: str = "GET") -> object:
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT}, method=method)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            charset = resp.headers.get_content_charset() or "utf-8"
            body = resp.read().decode(charset, errors="replace")
    except urllib.error.HTTPError as exc:
        raise SourceError(source, f"HTTP {exc.code} from {url}") from exc
    except (urllib.error.URLError, OSError) as exc:
        raise SourceError(source, f"request failed: {exc}") from exc
    try:
        return json.loads(body)
    except json.JSONDecodeError as exc:
        raise SourceError(source, f"invalid JSON from {url}") from exc


def matches_query(query: str, *fields: str) -> bool:
    needle = (query or "").strip().lower()
    if not needle:
        return True
    return any(needle in (field or "").lower() for field in fields)

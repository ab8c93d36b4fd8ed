"""Bookmarks from a Chromium profile's `Bookmarks` JSON file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterator, List, Optional

from quickswitch.picker.models import TimeWindow

from .base import BlockingSource, SourceError, matches_query
from .profile import resolve_profile_dir

ROOT_FOLDERS = ("bookmark_bar", "other", "synced")


def iter_bookmarks(node: dict) -> Iterator[dict]:
    """Depth-first walk yielding url nodes in folder order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if not isinstance(current, dict):
            continue
        if current.get("type") == "url":
            yield current
            continue
        children = current.get("children") or []
        stack.extend(reversed(children))


class BookmarkSource(BlockingSource):
    name = "bookmarks"

    def __init__(self, profile_dir: str | Path | None = None, path: str | Path | None = None):
        self.path = Path(path) if path else resolve_profile_dir(profile_dir) / "Bookmarks"

    def load(self) -> dict:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise SourceError(self.name, f"bookmarks file not found: {self.path}") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise SourceError(self.name, f"cannot read {self.path.name}: {exc}") from exc
        roots = data.get("roots") if isinstance(data, dict) else None
        if not isinstance(roots, dict):
            raise SourceError(self.name, "bookmarks file has no roots")
        return roots

    def search_blocking(self, query: str, count: int, time_window: Optional[TimeWindow]) -> List[dict]:
        roots = self.load()
        results: List[dict] = []
        for folder in ROOT_FOLDERS:
            for node in iter_bookmarks(roots.get(folder) or {}):
                title = str(node.get("name") or "")
                url = str(node.get("url") or "")
                if not url or not matches_query(query, title, url):
                    continue
                results.append({"title": title, "url": url})
                if len(results) >= count:
                    return results
        return results

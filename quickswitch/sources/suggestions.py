"""Search-engine query suggestions."""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import quote_plus

from quickswitch.picker.config import DEFAULT_CFG
from quickswitch.picker.models import TimeWindow

from .base import BlockingSource, SourceError, fetch_json


def parse_suggestions(payload: object) -> List[str]:
    """Parse the OpenSearch suggestion shape `[query, [s1, s2, ...], ...]`."""
    if not isinstance(payload, list) or len(payload) < 2 or not isinstance(payload[1], list):
        raise ValueError("not an OpenSearch suggestion payload")
    return [str(s) for s in payload[1] if isinstance(s, str) and s.strip()]


class SuggestionSource(BlockingSource):
    name = "suggestions"

    def __init__(self, url_template: str | None = None, language: str | None = None, timeout: float = 2.0):
        self.url_template = url_template or DEFAULT_CFG["suggestUrl"]
        self.language = language or DEFAULT_CFG["suggestLanguage"]
        self.timeout = timeout

    def build_url(self, query: str) -> str:
        return self.url_template.replace("{query}", quote_plus(query)).replace("{lang}", quote_plus(self.language))

    def search_blocking(self, query: str, count: int, time_window: Optional[TimeWindow]) -> List[str]:
        query = query.strip()
        if not query:
            return []
        payload = fetch_json(self.build_url(query), source=self.name, timeout=self.timeout)
        try:
            suggestions = parse_suggestions(payload)
        except ValueError as exc:
            raise SourceError(self.name, str(exc)) from exc
        return suggestions[:count]

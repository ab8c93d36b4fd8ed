"""Open tabs from a Chromium remote-debugging endpoint."""

from __future__ import annotations

import urllib.error
import urllib.parse
import urllib.request
from typing import List, Optional

from quickswitch.picker.config import DEFAULT_CFG
from quickswitch.picker.models import TimeWindow

from .base import USER_AGENT, BlockingSource, SourceError, fetch_json, matches_query

SKIP_PREFIXES = (
    "devtools://",
    "chrome-extension://",
)


class TabSource(BlockingSource):
    """Lists page targets from `<devtools>/json/list`.

    Targets come back most-recently-used first, which is also the order the
    idle view shows them in.
    """

    name = "tabs"

    def __init__(self, base_url: str | None = None, timeout: float = 2.0):
        self.base_url = (base_url or DEFAULT_CFG["devtoolsUrl"]).rstrip("/")
        self.timeout = timeout

    def search_blocking(self, query: str, count: int, time_window: Optional[TimeWindow]) -> List[dict]:
        targets = fetch_json(f"{self.base_url}/json/list", source=self.name, timeout=self.timeout)
        if not isinstance(targets, list):
            raise SourceError(self.name, "unexpected /json/list payload")

        results: List[dict] = []
        for target in targets:
            if not isinstance(target, dict) or target.get("type") != "page":
                continue
            url = str(target.get("url") or "")
            if url.startswith(SKIP_PREFIXES):
                continue
            title = str(target.get("title") or "")
            if not matches_query(query, title, url):
                continue
            results.append(
                {
                    "id": target.get("id"),
                    "title": title,
                    "url": url,
                    "favIconUrl": target.get("faviconUrl") or "",
                }
            )
            if len(results) >= count:
                break
        return results


def activate_tab(base_url: str, tab_id: object, timeout: float = 2.0) -> None:
    """Bring a tab to the front. Raises SourceError if the target is gone."""
    target = urllib.parse.quote(str(tab_id), safe="")
    req = urllib.request.Request(
        f"{base_url.rstrip('/')}/json/activate/{target}",
        headers={"User-Agent": USER_AGENT},
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            resp.read()
    except urllib.error.HTTPError as exc:
        raise SourceError("tabs", f"cannot activate tab {tab_id}: HTTP {exc.code}") from exc
    except (urllib.error.URLError, OSError) as exc:
        raise SourceError("tabs", f"cannot activate tab {tab_id}: {exc}") from exc

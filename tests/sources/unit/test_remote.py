import asyncio
import io
import json
import urllib.error

import pytest

from quickswitch.sources import base, tabs
from quickswitch.sources.base import SourceError, fetch_json
from quickswitch.sources.suggestions import SuggestionSource, parse_suggestions
from quickswitch.sources.tabs import TabSource, activate_tab


class _Resp(io.BytesIO):
    def __init__(self, payload):
        super().__init__(payload.encode("utf-8"))
        self.headers = _Headers()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class _Headers:
    def get_content_charset(self):
        return "utf-8"


def test_fetch_json_wraps_transport_errors(monkeypatch):
    def boom(*_args, **_kwargs):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr(base.urllib.request, "urlopen", boom)
    with pytest.raises(SourceError) as excinfo:
        fetch_json("http://127.0.0.1:9222/json/list", source="tabs")
    assert "connection refused" in str(excinfo.value)


def test_fetch_json_rejects_invalid_body(monkeypatch):
    monkeypatch.setattr(base.urllib.request, "urlopen", lambda *_a, **_k: _Resp("<html>"))
    with pytest.raises(SourceError):
        fetch_json("http://x", source="suggestions")


def test_tab_source_keeps_pages_matching_query(monkeypatch):
    targets = [
        {"id": "A", "type": "page", "title": "GitHub", "url": "https://github.com", "faviconUrl": "https://github.com/f.ico"},
        {"id": "B", "type": "service_worker", "title": "git worker", "url": "https://github.com/sw.js"},
        {"id": "C", "type": "page", "title": "DevTools", "url": "devtools://devtools/git"},
        {"id": "D", "type": "page", "title": "News", "url": "https://news.example/git"},
        {"id": "E", "type": "page", "title": "Mail", "url": "https://mail.example"},
    ]
    seen = {}

    def fake_fetch(url, *, source, timeout=5.0, method="GET"):
        seen["url"] = url
        return targets

    monkeypatch.setattr(tabs, "fetch_json", fake_fetch)
    rows = asyncio.run(TabSource("http://127.0.0.1:9222/").search("git", count=10))

    assert seen["url"] == "http://127.0.0.1:9222/json/list"
    assert [r["id"] for r in rows] == ["A", "D"]
    assert rows[0]["favIconUrl"] == "https://github.com/f.ico"


def test_tab_source_empty_query_lists_all_pages_up_to_count(monkeypatch):
    targets = [{"id": str(i), "type": "page", "title": f"t{i}", "url": f"https://e/{i}"} for i in range(6)]
    monkeypatch.setattr(tabs, "fetch_json", lambda *_a, **_k: targets)
    rows = TabSource().search_blocking("", 4, None)
    assert [r["id"] for r in rows] == ["0", "1", "2", "3"]


def test_activate_tab_hits_activate_endpoint(monkeypatch):
    seen = {}

    def fake_urlopen(req, timeout=None):
        seen["url"] = req.full_url
        return _Resp("Target activated")

    monkeypatch.setattr(tabs.urllib.request, "urlopen", fake_urlopen)
    activate_tab("http://127.0.0.1:9222/", "ABC 1")
    assert seen["url"] == "http://127.0.0.1:9222/json/activate/ABC%201"


def test_activate_closed_tab_raises_source_error(monkeypatch):
    def gone(req, timeout=None):
        raise urllib.error.HTTPError(req.full_url, 404, "Not Found", {}, None)

    monkeypatch.setattr(tabs.urllib.request, "urlopen", gone)
    with pytest.raises(SourceError):
        activate_tab("http://127.0.0.1:9222", "dead")


def test_parse_suggestions_shape():
    assert parse_suggestions(["git", ["git", "github", "", 3, "gitlab"]]) == ["git", "github", "gitlab"]
    with pytest.raises(ValueError):
        parse_suggestions({"q": "git"})


def test_suggestion_source_builds_url_and_truncates(monkeypatch):
    seen = {}

    def fake_urlopen(req, timeout=None):
        seen["url"] = req.full_url
        return _Resp(json.dumps(["c++", ["c++ reference", "c++ tutorial", "c++ compiler"]]))

    monkeypatch.setattr(base.urllib.request, "urlopen", fake_urlopen)
    source = SuggestionSource("https://suggest.example/?q={query}&hl={lang}", language="de")
    rows = asyncio.run(source.search("c++", count=2))

    assert seen["url"] == "https://suggest.example/?q=c%2B%2B&hl=de"
    assert rows == ["c++ reference", "c++ tutorial"]


def test_suggestion_source_skips_blank_query(monkeypatch):
    def fail(*_a, **_k):
        raise AssertionError("no request expected")

    monkeypatch.setattr(base.urllib.request, "urlopen", fail)
    assert SuggestionSource().search_blocking("   ", 5, None) == []


def test_suggestion_source_wraps_bad_payload(monkeypatch):
    monkeypatch.setattr(base.urllib.request, "urlopen", lambda *_a, **_k: _Resp(json.dumps({"nope": 1})))
    with pytest.raises(SourceError):
        SuggestionSource().search_blocking("x", 5, None)

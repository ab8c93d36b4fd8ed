"""Pytest configuration for shared test markers."""

import pytest


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "live_browser: talks to a real browser profile or devtools endpoint (opt-in only).",
    )


def pytest_collection_modifyitems(config, items):
    markexpr = config.getoption("markexpr", default="") or ""
    if "live_browser" in markexpr:
        return
    skip_live = pytest.mark.skip(reason="live browser tests are opt-in (-m live_browser)")
    for item in items:
        if "live_browser" in item.keywords:
            item.add_marker(skip_live)

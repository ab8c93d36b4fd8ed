"""Browser profile location helpers."""

from __future__ import annotations

import os
import sys
from pathlib import Path

# Chromium stores timestamps as microseconds since 1601-01-01 UTC.
WEBKIT_EPOCH_OFFSET_MS = 11_644_473_600_000


def default_profile_dir() -> Path:
    if sys.platform == "darwin":
        return Path("~/Library/Application Support/Google/Chrome/Default").expanduser()
    if sys.platform.startswith("win"):
        local = os.environ.get("LOCALAPPDATA") or str(Path("~/AppData/Local").expanduser())
        return Path(local) / "Google" / "Chrome" / "User Data" / "Default"
    return Path("~/.config/google-chrome/Default").expanduser()


def resolve_profile_dir(value: str | os.PathLike | None) -> Path:
    if value:
        return Path(value).expanduser()
    return default_profile_dir()


def epoch_ms_to_webkit(ts_ms: int) -> int:
    return (int(ts_ms) + WEBKIT_EPOCH_OFFSET_MS) * 1000


def webkit_to_epoch_ms(ts_us: int) -> int:
    return int(ts_us) // 1000 - WEBKIT_EPOCH_OFFSET_MS

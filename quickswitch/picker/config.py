"""Picker configuration and shared constants."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict

CONFIG_PATH = Path(
    os.environ.get("QUICKSWITCH_CONFIG_PATH", "~/.config/quickswitch/config.json")
).expanduser()

DEFAULT_CFG: Dict = {
    "suggestionCount": 5,
    "tabCount": 10,
    "idleTabCount": 10,
    "historyCount": 10,
    "bookmarkCount": 5,
    "historyWindowDays": 30,
    "sourceTimeoutSeconds": 2.0,
    "searchUrlTemplate": "https://www.google.com/search?q={query}",
    "titleMaxLen": 0,
    "closeAfterOpen": True,
    "devtoolsUrl": os.environ.get("QUICKSWITCH_DEVTOOLS_URL", "http://127.0.0.1:9222"),
    "profileDir": os.environ.get("QUICKSWITCH_PROFILE_DIR", ""),
    "suggestUrl": os.environ.get(
        "QUICKSWITCH_SUGGEST_URL",
        "https://suggestqueries.google.com/complete/search?client=firefox&q={query}&hl={lang}",
    ),
    "suggestLanguage": "en",
}

DAY_MS = 1000 * 60 * 60 * 24


def merge_cfg(file_cfg: Dict | None, override_cfg: Dict | None) -> Dict:
    merged = dict(DEFAULT_CFG)
    if file_cfg:
        merged.update(file_cfg)
    if override_cfg:
        merged.update(override_cfg)
    return merged


def load_cfg(path: Path | None = None) -> Dict:
    """Read a JSON config file.

    The default location may be absent (defaults apply); an explicit path must
    exist and hold a JSON object.
    """
    explicit = path is not None
    p = Path(path).expanduser() if explicit else CONFIG_PATH
    if not p.exists():
        if explicit:
            raise FileNotFoundError(f"Config not found: {p}")
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Config is not valid JSON: {p} ({exc})") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a JSON object: {p}")
    return data


def cfg_count(cfg: Dict, key: str) -> int:
    try:
        value = int(cfg.get(key, DEFAULT_CFG[key]))
    except (TypeError, ValueError):
        value = int(DEFAULT_CFG[key])
    return max(0, value)


def cfg_float(cfg: Dict, key: str) -> float:
    try:
        return float(cfg.get(key, DEFAULT_CFG[key]))
    except (TypeError, ValueError):
        return float(DEFAULT_CFG[key])


def cfg_bool(value: object, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    v = str(value).strip().lower()
    if v in {"1", "true", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "no", "n", "off"}:
        return False
    return default

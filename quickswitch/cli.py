#!/usr/bin/env python3
"""Run one quick-switcher round from the command line.

Flow:
- Load config.json (~/.config/quickswitch by default) and merge over defaults
- Fan out to tabs / history / suggestions / bookmarks for the query
- Print the ranked, deduplicated list (plain or --json)
- Optionally activate one row (--activate N): focus the tab or open the URL

An empty query lists open tabs only, like the picker's idle view.

Env:
- QUICKSWITCH_CONFIG_PATH, QUICKSWITCH_DEVTOOLS_URL, QUICKSWITCH_PROFILE_DIR,
  QUICKSWITCH_SUGGEST_URL override the config file location and endpoints.
"""

import asyncio
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from quickswitch.item_policy import ItemType, truncate, type_label
from quickswitch.picker.config import cfg_bool, cfg_count, cfg_float, load_cfg, merge_cfg
from quickswitch.picker.coordinator import QueryCoordinator
from quickswitch.picker.dispatch import ActionDispatcher
from quickswitch.picker.models import ResultItem
from quickswitch.picker.session import PickerSession
from quickswitch.sources import BookmarkSource, HistorySource, SuggestionSource, TabSource, activate_tab

VERBOSE = False
JSON_OUTPUT = False
CONFIG_OVERRIDE: Optional[Path] = None
ACTIVATE_INDEX: Optional[int] = None

USAGE = "usage: quickswitch [--verbose] [--json] [--config PATH] [--activate N] [QUERY ...]"


def log(msg: str) -> None:
    if not VERBOSE:
        return
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[quickswitch] {ts} {msg}", file=sys.stderr)


def _parse_index(value: str) -> int:
    try:
        index = int(value)
    except ValueError:
        raise SystemExit(f"invalid --activate value: {value}")
    if index < 0:
        raise SystemExit(f"invalid --activate value: {value}")
    return index


def parse_args(argv: List[str]) -> str:
    global VERBOSE, JSON_OUTPUT, CONFIG_OVERRIDE, ACTIVATE_INDEX
    VERBOSE = False
    JSON_OUTPUT = False
    CONFIG_OVERRIDE = None
    ACTIVATE_INDEX = None
    words: List[str] = []
    args = list(argv[1:])
    idx = 0
    while idx < len(args):
        arg = args[idx]
        if arg == "--":
            words.extend(args[idx + 1 :])
            break
        if arg in ("-v", "--verbose"):
            VERBOSE = True
        elif arg == "--json":
            JSON_OUTPUT = True
        elif arg in ("--config", "--activate"):
            if idx + 1 >= len(args):
                raise SystemExit(f"{arg} requires a value")
            idx += 1
            if arg == "--config":
                CONFIG_OVERRIDE = Path(args[idx])
            else:
                ACTIVATE_INDEX = _parse_index(args[idx])
        elif arg.startswith("--config="):
            CONFIG_OVERRIDE = Path(arg.split("=", 1)[1])
        elif arg.startswith("--activate="):
            ACTIVATE_INDEX = _parse_index(arg.split("=", 1)[1])
        elif arg in ("-h", "--help"):
            print(USAGE, file=sys.stderr)
            raise SystemExit(0)
        elif arg.startswith("-") and arg != "-":
            raise SystemExit(f"unknown option: {arg}")
        else:
            words.append(arg)
        idx += 1
    return " ".join(words)


def build_sources(cfg: Dict) -> Dict[ItemType, object]:
    timeout = cfg_float(cfg, "sourceTimeoutSeconds")
    profile_dir = cfg.get("profileDir") or None
    return {
        ItemType.TAB: TabSource(cfg.get("devtoolsUrl"), timeout=timeout),
        ItemType.HISTORY: HistorySource(profile_dir=profile_dir),
        ItemType.SEARCH: SuggestionSource(cfg.get("suggestUrl"), cfg.get("suggestLanguage"), timeout=timeout),
        ItemType.BOOKMARK: BookmarkSource(profile_dir=profile_dir),
    }


def build_session(cfg: Dict, sources: Optional[Dict[ItemType, object]] = None) -> PickerSession:
    stderr = sys.stderr if VERBOSE else None
    devtools_url = str(cfg.get("devtoolsUrl"))
    timeout = cfg_float(cfg, "sourceTimeoutSeconds")
    coordinator = QueryCoordinator(sources or build_sources(cfg), cfg, stderr=stderr)
    dispatcher = ActionDispatcher(
        lambda tab_id: activate_tab(devtools_url, tab_id, timeout=timeout),
        dismiss_fn=lambda: log("dismiss"),
        close_after_open=cfg_bool(cfg.get("closeAfterOpen"), default=True),
        stderr=stderr,
    )
    return PickerSession(coordinator, dispatcher)


def format_row(index: int, item: ResultItem, max_len: int = 0) -> str:
    label = type_label(item.type)
    target = f"#{item.id}" if item.type is ItemType.TAB else item.url
    title = truncate(item.title or item.url, max_len)
    return f"{index:>2}  [{label:<8}] {title}  <{target}>"


def emit_result(
    items: Sequence[ResultItem],
    query: str,
    activated: Optional[ResultItem] = None,
    max_len: int = 0,
) -> None:
    if JSON_OUTPUT:
        payload = {
            "query": query,
            "items": [item.to_dict() for item in items],
            "activated": activated.to_dict() if activated else None,
        }
        print(json.dumps(payload, sort_keys=True, ensure_ascii=False))
        return
    for index, item in enumerate(items):
        print(format_row(index, item, max_len))
    if activated is not None:
        print(f"activated: {activated.title or activated.url}")


async def run(query: str, cfg: Dict) -> int:
    session = build_session(cfg)
    log(f"query={query!r}")
    items = await session.on_query_change(query)
    if items is None:
        items = session.active_list
    log(f"results={len(items)}")
    # Titles are truncated for display only.
    max_len = cfg_count(cfg, "titleMaxLen")

    if not items:
        emit_result(items, query, max_len=max_len)
        return 3

    activated = None
    if ACTIVATE_INDEX is not None:
        if ACTIVATE_INDEX >= len(items):
            print(f"--activate {ACTIVATE_INDEX} out of range (0..{len(items) - 1})", file=sys.stderr)
            return 2
        activated = items[ACTIVATE_INDEX]
        session.on_click(ACTIVATE_INDEX)
    emit_result(items, query, activated, max_len)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv if argv is None else argv)
    try:
        query = parse_args(argv)
    except SystemExit as exc:
        if exc.code in (0, None):
            return 0
        print(str(exc.code), file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2

    try:
        cfg = merge_cfg(load_cfg(CONFIG_OVERRIDE), None)
    except (OSError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 1

    return asyncio.run(run(query, cfg))


if __name__ == "__main__":
    raise SystemExit(main())

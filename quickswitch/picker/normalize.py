"""Normalization of raw source items into result items."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Tuple
from urllib.parse import quote_plus

from quickswitch.item_policy import ItemType, normalize_title

from .config import DEFAULT_CFG
from .models import ResultItem


def _field(raw: object, *names: str) -> object:
    for name in names:
        if isinstance(raw, Mapping):
            value = raw.get(name)
        else:
            value = getattr(raw, name, None)
        if value is not None:
            return value
    return None


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def search_url(text: str, template: str | None = None) -> str:
    template = template or DEFAULT_CFG["searchUrlTemplate"]
    return template.replace("{query}", quote_plus(text))


def normalize_item(raw: object, item_type: ItemType, cfg: Dict | None = None) -> ResultItem:
    cfg = cfg or DEFAULT_CFG
    if isinstance(raw, str):
        title_raw = raw
        raw = {}
    else:
        title_raw = _text(_field(raw, "title", "name", "text"))
    title = normalize_title(title_raw)

    if item_type is ItemType.SEARCH:
        return ResultItem(
            type=item_type,
            title=title,
            url=search_url(title_raw.strip(), cfg.get("searchUrlTemplate")),
        )

    url = _text(_field(raw, "url")).strip()
    if item_type is ItemType.TAB:
        icon = _text(_field(raw, "favIconUrl", "icon")).strip() or None
        return ResultItem(type=item_type, title=title, url=url, id=_field(raw, "id"), icon=icon)

    return ResultItem(type=item_type, title=title, url=url)


def normalize_batches(batches: Iterable[Tuple[ItemType, List[object]]], cfg: Dict | None = None) -> List[ResultItem]:
    """Flatten per-source batches in the given order, dropping items with no identity."""
    normalized: List[ResultItem] = []
    for item_type, raw_items in batches:
        for raw in raw_items or []:
            item = normalize_item(raw, item_type, cfg)
            if not item.key:
                continue
            normalized.append(item)
    return normalized

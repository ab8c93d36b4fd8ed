"""Deterministic ordering of deduplicated results."""

from __future__ import annotations

from typing import Iterable, Tuple

from quickswitch.item_policy import fold, type_priority

from .models import ResultItem


def rank_key(item: ResultItem, query: str) -> Tuple[int, int, int]:
    needle = fold(query)
    title = fold(item.title)
    exact = bool(needle) and title == needle
    partial = bool(needle) and needle in title
    return (
        0 if exact else 1,
        0 if partial else 1,
        type_priority(item.type),
    )


def rank(items: Iterable[ResultItem], query: str) -> Tuple[ResultItem, ...]:
    # sorted() is stable: full ties keep fan-out order.
    return tuple(sorted(items, key=lambda item: rank_key(item, query)))

"""Order-preserving duplicate collapsing."""

from __future__ import annotations

from typing import Iterable, Tuple

from .models import ResultItem


def dedupe(items: Iterable[ResultItem]) -> Tuple[ResultItem, ...]:
    """Keep the first item per key (title, else url) regardless of type.

    Unrelated items sharing a title collapse into one entry.
    """
    seen = set()
    kept = []
    for item in items:
        key = item.key
        if key in seen:
            continue
        seen.add(key)
        kept.append(item)
    return tuple(kept)

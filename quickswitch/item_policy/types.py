"""Result item vocabulary shared by sources, pipeline and dispatch."""

from __future__ import annotations

from enum import IntEnum


class ItemType(IntEnum):
    # Value doubles as ranking priority (lower sorts first).
    TAB = 0
    HISTORY = 1
    SEARCH = 2
    BOOKMARK = 3


# Order in which source results are concatenated before dedupe.
FANOUT_ORDER = (ItemType.SEARCH, ItemType.TAB, ItemType.HISTORY, ItemType.BOOKMARK)


def type_priority(item_type: ItemType) -> int:
    return int(item_type)


def type_label(item_type: ItemType) -> str:
    return item_type.name.lower()

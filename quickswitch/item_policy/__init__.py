"""Shared result item semantics used across pipeline stages."""

from .text import fold, normalize_title, truncate
from .types import FANOUT_ORDER, ItemType, type_label, type_priority

__all__ = [
    "ItemType",
    "FANOUT_ORDER",
    "type_label",
    "type_priority",
    "fold",
    "normalize_title",
    "truncate",
]

"""Data models for the picker pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from quickswitch.item_policy import ItemType, type_label


@dataclass(frozen=True)
class ResultItem:
    type: ItemType
    title: str = ""
    url: str = ""
    id: Optional[object] = None
    icon: Optional[str] = None

    def __post_init__(self) -> None:
        if self.id is not None and self.type is not ItemType.TAB:
            raise ValueError(f"only tab items carry an id (got {type_label(self.type)})")

    @property
    def key(self) -> str:
        """Identity used to collapse duplicates: title, falling back to url."""
        return self.title or self.url

    def to_dict(self) -> Dict:
        out: Dict = {"type": type_label(self.type), "title": self.title}
        if self.type is ItemType.TAB:
            out["id"] = self.id
            if self.icon:
                out["icon"] = self.icon
            if self.url:
                out["url"] = self.url
        else:
            out["url"] = self.url
        return out


@dataclass(frozen=True)
class TimeWindow:
    start_ms: int
    end_ms: int

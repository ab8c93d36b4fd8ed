"""Shared text normalization helpers."""

from __future__ import annotations

import re


def normalize_title(title: str) -> str:
    title = title.replace("\r\n", "\n").replace("\r", "\n")
    return re.sub(r"\s+", " ", title).strip()


def fold(value: str) -> str:
    """Lower-case for matching. No locale collation."""
    return (value or "").lower()


def truncate(text: str, max_len: int) -> str:
    if max_len <= 0 or len(text) <= max_len:
        return text
    truncated = text[: max_len - 1].rstrip()
    return f"{truncated}…" if truncated else "…"

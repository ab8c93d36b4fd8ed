"""Terminal actions for a chosen result."""

from __future__ import annotations

import webbrowser
from typing import Callable, Optional, TextIO

from quickswitch.item_policy import ItemType, type_label

from .models import ResultItem


def _noop() -> None:
    return None


class ActionDispatcher:
    """Focus a tab or open a URL, then dismiss the picker.

    Failures are reported to `stderr` and otherwise ignored; the caller never
    retries.
    """

    def __init__(
        self,
        activate_tab_fn: Callable[[object], None],
        *,
        open_url_fn: Optional[Callable[[str], object]] = None,
        dismiss_fn: Callable[[], None] = _noop,
        close_after_open: bool = True,
        stderr: Optional[TextIO] = None,
    ):
        self._activate_tab = activate_tab_fn
        self._open_url = open_url_fn or webbrowser.open_new_tab
        self._dismiss = dismiss_fn
        self.close_after_open = close_after_open
        self._stderr = stderr

    def _diag(self, msg: str) -> None:
        if self._stderr is not None:
            print(f"[quickswitch] {msg}", file=self._stderr)

    def dismiss(self) -> None:
        self._dismiss()

    def activate(self, item: ResultItem) -> None:
        if item.type is ItemType.TAB:
            try:
                self._activate_tab(item.id)
            except Exception as exc:
                self._diag(f"warn: cannot focus tab {item.id} ({exc})")
                return
            self._dismiss()
            return

        if item.type in (ItemType.HISTORY, ItemType.SEARCH, ItemType.BOOKMARK):
            try:
                self._open_url(item.url)
            except Exception as exc:
                self._diag(f"warn: cannot open {type_label(item.type)} url {item.url} ({exc})")
                return
            if self.close_after_open:
                self._dismiss()
            return

        raise ValueError(f"unhandled item type: {item.type!r}")

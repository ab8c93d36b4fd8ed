"""Highlighted-row state over the active list."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from .models import ResultItem

ARROW_UP = "ArrowUp"
ARROW_DOWN = "ArrowDown"
ENTER = "Enter"
DISMISS = "Dismiss"
KEYS = (ARROW_UP, ARROW_DOWN, ENTER, DISMISS)

NO_SELECTION = -1


class SelectionState:
    """Index in `[-1, n-1]`; -1 means nothing selected.

    Tracks position only. When the list is replaced the index goes back to the
    top row (or -1 for an empty list) rather than following an item.
    """

    def __init__(
        self,
        activate: Callable[[ResultItem], None],
        dismiss: Callable[[], None],
    ):
        self._activate = activate
        self._dismiss = dismiss
        self._items: Sequence[ResultItem] = ()
        self.index = NO_SELECTION
        self.composing = False

    @property
    def items(self) -> Sequence[ResultItem]:
        return self._items

    @property
    def selected(self) -> Optional[ResultItem]:
        if 0 <= self.index < len(self._items):
            return self._items[self.index]
        return None

    def replace_list(self, items: Sequence[ResultItem]) -> None:
        self._items = items
        self.index = 0 if items else NO_SELECTION

    def arrow_down(self) -> None:
        n = len(self._items)
        if n == 0:
            return
        self.index = min(self.index + 1, n - 1)

    def arrow_up(self) -> None:
        if not self._items:
            return
        self.index = max(self.index - 1, 0)

    def hover(self, index: int) -> None:
        self.index = index

    def enter(self) -> bool:
        """Dispatch the highlighted item. Returns False for a no-op."""
        if self.composing:
            return False
        item = self.selected
        if item is None:
            return False
        self._activate(item)
        self.index = NO_SELECTION
        return True

    def click(self, index: int) -> bool:
        if not 0 <= index < len(self._items):
            return False
        self._activate(self._items[index])
        self.index = NO_SELECTION
        return True

    def dismiss(self) -> None:
        self._dismiss()

    def handle(self, key: str) -> None:
        if key == ARROW_DOWN:
            self.arrow_down()
        elif key == ARROW_UP:
            self.arrow_up()
        elif key == ENTER:
            self.enter()
        elif key == DISMISS:
            self.dismiss()
        else:
            raise ValueError(f"unknown key: {key!r}")

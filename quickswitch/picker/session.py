"""Host-facing picker session: renderable state plus input events."""

from __future__ import annotations

from typing import Optional, Tuple

from .coordinator import QueryCoordinator, Snapshot
from .dispatch import ActionDispatcher
from .models import ResultItem
from .selection import ARROW_DOWN, ARROW_UP, DISMISS, ENTER, KEYS, SelectionState


class PickerSession:
    def __init__(self, coordinator: QueryCoordinator, dispatcher: ActionDispatcher):
        self.coordinator = coordinator
        self.dispatcher = dispatcher
        self.query = ""
        self.dismissed = False
        self._selection = SelectionState(activate=dispatcher.activate, dismiss=self._on_dismiss)
        coordinator.subscribe(self._on_publish)

    @property
    def active_list(self) -> Tuple[ResultItem, ...]:
        return self.coordinator.active_list

    @property
    def selected_index(self) -> int:
        return self._selection.index

    @property
    def selected(self) -> Optional[ResultItem]:
        return self._selection.selected

    @property
    def composing(self) -> bool:
        return self._selection.composing

    def _on_publish(self, snapshot: Snapshot) -> None:
        self._selection.replace_list(snapshot)

    def _on_dismiss(self) -> None:
        self.dismissed = True
        self.dispatcher.dismiss()

    async def open(self) -> Optional[Snapshot]:
        """Populate the idle view (open tabs only)."""
        return await self.on_query_change("")

    async def on_query_change(self, text: str) -> Optional[Snapshot]:
        self.query = text
        return await self.coordinator.run_query(text)

    def on_key(self, key: str) -> None:
        if key not in KEYS:
            raise ValueError(f"unknown key: {key!r}")
        self._selection.handle(key)

    def handle_key_event(self, key: str, *, meta: bool = False, ctrl: bool = False) -> bool:
        """Map a raw key press to a picker key. Returns True if consumed."""
        if (meta or ctrl) and key.lower() == "t":
            self.on_key(DISMISS)
            return True
        if key in (ARROW_UP, ARROW_DOWN, ENTER):
            self.on_key(key)
            return True
        return False

    def on_hover(self, index: int) -> None:
        if 0 <= index < len(self._selection.items):
            self._selection.hover(index)

    def on_click(self, index: int) -> bool:
        return self._selection.click(index)

    def on_composition_start(self) -> None:
        self._selection.composing = True

    def on_composition_end(self) -> None:
        self._selection.composing = False

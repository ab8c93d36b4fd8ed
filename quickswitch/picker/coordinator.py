"""Fan-out query rounds with stale-result suppression."""

from __future__ import annotations

import asyncio
import time
from typing import Callable, Dict, List, Optional, TextIO, Tuple

from quickswitch.item_policy import FANOUT_ORDER, ItemType, type_label

from .config import DAY_MS, cfg_count, cfg_float, merge_cfg
from .dedupe import dedupe
from .models import ResultItem, TimeWindow
from .normalize import normalize_batches
from .ranking import rank

Snapshot = Tuple[ResultItem, ...]

COUNT_KEY_BY_TYPE = {
    ItemType.SEARCH: "suggestionCount",
    ItemType.TAB: "tabCount",
    ItemType.HISTORY: "historyCount",
    ItemType.BOOKMARK: "bookmarkCount",
}


def _now_ms() -> int:
    return int(time.time() * 1000)


class QueryCoordinator:
    """Runs one round per query and publishes only the newest round's list.

    In-flight adapter calls are never cancelled; a round that finishes after a
    newer one was started is dropped on arrival.
    """

    def __init__(
        self,
        sources: Dict[ItemType, object],
        cfg: Dict | None = None,
        *,
        clock_ms: Callable[[], int] = _now_ms,
        stderr: Optional[TextIO] = None,
    ):
        missing = [type_label(t) for t in FANOUT_ORDER if t not in sources]
        if missing:
            raise ValueError(f"missing sources: {', '.join(missing)}")
        self._sources = dict(sources)
        self._cfg = merge_cfg(cfg, None)
        self._clock_ms = clock_ms
        self._stderr = stderr
        self._generation = 0
        self._published_generation = 0
        self._active: Snapshot = ()
        self._listeners: List[Callable[[Snapshot], None]] = []

    @property
    def active_list(self) -> Snapshot:
        return self._active

    @property
    def generation(self) -> int:
        return self._generation

    def subscribe(self, callback: Callable[[Snapshot], None]) -> None:
        self._listeners.append(callback)

    def _diag(self, msg: str) -> None:
        if self._stderr is not None:
            print(f"[quickswitch] {msg}", file=self._stderr)

    def _plan(self, query: str) -> List[Tuple[ItemType, int, Optional[TimeWindow]]]:
        if not query:
            return [(ItemType.TAB, cfg_count(self._cfg, "idleTabCount"), None)]

        now = self._clock_ms()
        days = cfg_count(self._cfg, "historyWindowDays")
        window = TimeWindow(start_ms=now - days * DAY_MS, end_ms=now)
        plan = []
        for item_type in FANOUT_ORDER:
            count = cfg_count(self._cfg, COUNT_KEY_BY_TYPE[item_type])
            plan.append((item_type, count, window if item_type is ItemType.HISTORY else None))
        return plan

    async def _call_source(self, item_type: ItemType, query: str, count: int, window: Optional[TimeWindow]) -> List:
        source = self._sources[item_type]
        timeout = cfg_float(self._cfg, "sourceTimeoutSeconds")
        try:
            coro = source.search(query, count=count, time_window=window)
            if timeout > 0:
                result = await asyncio.wait_for(coro, timeout=timeout)
            else:
                result = await coro
            # Lazy results can still fail while being read.
            items = list(result or [])
        except asyncio.TimeoutError:
            self._diag(f"warn: source {type_label(item_type)} timed out after {timeout}s")
            return []
        except Exception as exc:
            self._diag(f"warn: source {type_label(item_type)} failed ({exc})")
            return []
        return items[:count] if count else []

    async def run_query(self, query: str) -> Optional[Snapshot]:
        """Run one round. Returns the published list, or None if superseded."""
        self._generation += 1
        generation = self._generation

        plan = self._plan(query)
        results = await asyncio.gather(
            *(self._call_source(item_type, query, count, window) for item_type, count, window in plan)
        )

        if generation != self._generation:
            self._diag(f"drop stale round {generation} (current {self._generation})")
            return None

        batches = [(item_type, raw) for (item_type, _count, _window), raw in zip(plan, results)]
        items = normalize_batches(batches, self._cfg)
        ranked = rank(dedupe(items), query)
        self._publish(generation, ranked)
        return ranked

    def _publish(self, generation: int, snapshot: Snapshot) -> None:
        if generation <= self._published_generation:
            return
        self._published_generation = generation
        self._active = snapshot
        for callback in list(self._listeners):
            callback(snapshot)

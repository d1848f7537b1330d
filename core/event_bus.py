"""In-process event bus for graph mutation and recompute notifications."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

EventHandler = Callable[[dict[str, Any]], None]

GRAPH_MUTATED = "graph.mutated"
ANALYSIS_RECOMPUTED = "analysis.recomputed"


class EventBus:
    """Dispatches events to subscribers by event name, in subscription order."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: EventHandler) -> Callable[[], None]:
        """Register a callback; the returned function removes it again."""
        self._handlers[event_name].append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(event_name, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def emit(self, event_name: str, payload: dict[str, Any]) -> None:
        for handler in list(self._handlers.get(event_name, [])):
            handler(payload)

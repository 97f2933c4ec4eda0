"""In-process domain event dispatch.

Use cases publish the events pulled from an aggregate after the
repository save succeeded. Handlers are async callables keyed by
``DomainEvent.event_type``; ``"*"`` receives every event.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Awaitable, Callable, Iterable

from wms.domain.shared.events import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], Awaitable[None]]

WILDCARD = "*"


class InMemoryEventBus:
    """Dispatches events to subscribed handlers in subscription order.

    A failing handler is logged and does not stop the remaining handlers:
    the state change the event describes is already persisted.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def handlers_for(self, event_type: str) -> list[EventHandler]:
        return [*self._handlers.get(event_type, []), *self._handlers.get(WILDCARD, [])]

    async def publish(self, events: Iterable[DomainEvent]) -> int:
        """Dispatch events. Returns the number of handler invocations."""
        dispatched = 0
        for event in events:
            for handler in self.handlers_for(event.event_type):
                try:
                    await handler(event)
                    dispatched += 1
                except Exception:
                    logger.exception(
                        "Event handler failed for %s (event_id=%s)",
                        event.event_type,
                        event.event_id,
                    )
        return dispatched


async def log_event(event: DomainEvent) -> None:
    """Default handler: record the event in the application log."""
    logger.info(
        "Domain event %s on %s: %s",
        event.event_type,
        event.aggregate_id,
        event.event_data(),
    )


def create_default_event_bus() -> InMemoryEventBus:
    bus = InMemoryEventBus()
    bus.subscribe(WILDCARD, log_event)
    return bus

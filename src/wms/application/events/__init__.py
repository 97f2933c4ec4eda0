from wms.application.events.event_bus import (
    EventHandler,
    InMemoryEventBus,
    create_default_event_bus,
    log_event,
)

__all__ = [
    "EventHandler",
    "InMemoryEventBus",
    "create_default_event_bus",
    "log_event",
]

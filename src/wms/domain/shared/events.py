"""Domain event base type.

Aggregates append events to a pending list on every state transition.
Dispatch happens in the application layer after a successful save.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar
from uuid import uuid4

from wms.domain.shared.entity_id import EntityId
from wms.domain.shared.time import utc_now


@dataclass(frozen=True)
class DomainEvent:
    """Immutable record of something that happened to an aggregate.

    Subclasses set ``event_type`` and implement ``event_data``.
    """

    event_type: ClassVar[str] = "DomainEvent"

    aggregate_id: EntityId
    event_id: str = field(default_factory=lambda: str(uuid4()), kw_only=True)
    occurred_on: datetime = field(default_factory=utc_now, kw_only=True)

    def event_data(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "aggregate_id": str(self.aggregate_id),
            "occurred_on": self.occurred_on.isoformat(),
            "data": self.event_data(),
        }

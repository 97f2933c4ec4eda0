"""User domain events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from wms.domain.shared.entity_id import EntityId
from wms.domain.shared.events import DomainEvent


def _id_or_none(value: Optional[EntityId]) -> Optional[str]:
    return str(value) if value is not None else None


@dataclass(frozen=True)
class UserCreatedEvent(DomainEvent):
    event_type: ClassVar[str] = "UserCreated"

    username: str
    email: str
    created_by: Optional[EntityId] = None

    def event_data(self) -> dict[str, Any]:
        return {
            "username": self.username,
            "email": self.email,
            "created_by": _id_or_none(self.created_by),
        }


@dataclass(frozen=True)
class UserUpdatedEvent(DomainEvent):
    """Carries ``{field: {"old": ..., "new": ...}}`` style change records."""

    event_type: ClassVar[str] = "UserUpdated"

    changes: dict[str, Any] = field(default_factory=dict)
    updated_by: Optional[EntityId] = None

    def event_data(self) -> dict[str, Any]:
        return {
            "changes": self.changes,
            "updated_by": _id_or_none(self.updated_by),
        }


@dataclass(frozen=True)
class UserDeactivatedEvent(DomainEvent):
    event_type: ClassVar[str] = "UserDeactivated"

    deactivated_by: Optional[EntityId] = None

    def event_data(self) -> dict[str, Any]:
        return {"deactivated_by": _id_or_none(self.deactivated_by)}

"""Role domain events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from wms.domain.shared.entity_id import EntityId
from wms.domain.shared.events import DomainEvent


@dataclass(frozen=True)
class RoleCreatedEvent(DomainEvent):
    event_type: ClassVar[str] = "RoleCreated"

    name: str
    slug: str
    created_by: Optional[EntityId] = None

    def event_data(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "slug": self.slug,
            "created_by": str(self.created_by) if self.created_by else None,
        }


@dataclass(frozen=True)
class RoleUpdatedEvent(DomainEvent):
    event_type: ClassVar[str] = "RoleUpdated"

    changes: dict[str, Any] = field(default_factory=dict)
    updated_by: Optional[EntityId] = None

    def event_data(self) -> dict[str, Any]:
        return {
            "changes": self.changes,
            "updated_by": str(self.updated_by) if self.updated_by else None,
        }

"""Base class for aggregates with audit columns and pending domain events."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from wms.domain.shared.entity_id import EntityId
from wms.domain.shared.events import DomainEvent
from wms.domain.shared.time import utc_now


class AuditableEntity:
    """Identity, audit trail, soft-delete marker and pending events.

    Subclasses mutate their own private state and call ``touch`` plus
    ``add_event`` once per real transition.
    """

    def __init__(
        self,
        entity_id: Optional[EntityId] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        deleted_at: Optional[datetime] = None,
        created_by: Optional[EntityId] = None,
        updated_by: Optional[EntityId] = None,
        deleted_by: Optional[EntityId] = None,
    ):
        now = utc_now()
        self._id = entity_id or EntityId.generate()
        self._created_at = created_at or now
        self._updated_at = updated_at or self._created_at
        self._deleted_at = deleted_at
        self._created_by = created_by
        self._updated_by = updated_by
        self._deleted_by = deleted_by
        self._domain_events: list[DomainEvent] = []

    @property
    def id(self) -> EntityId:
        return self._id

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def deleted_at(self) -> Optional[datetime]:
        return self._deleted_at

    @property
    def created_by(self) -> Optional[EntityId]:
        return self._created_by

    @property
    def updated_by(self) -> Optional[EntityId]:
        return self._updated_by

    @property
    def deleted_by(self) -> Optional[EntityId]:
        return self._deleted_by

    def is_deleted(self) -> bool:
        return self._deleted_at is not None

    def touch(self, updated_by: Optional[EntityId] = None) -> None:
        self._updated_at = utc_now()
        if updated_by is not None:
            self._updated_by = updated_by

    def mark_deleted(self, deleted_by: Optional[EntityId] = None) -> None:
        """Soft-delete: stamp deleted_at/deleted_by. No-op if already deleted."""
        if self.is_deleted():
            return
        self._deleted_at = utc_now()
        self._deleted_by = deleted_by
        self.touch(deleted_by)

    def restore(self, restored_by: Optional[EntityId] = None) -> None:
        if not self.is_deleted():
            return
        self._deleted_at = None
        self._deleted_by = None
        self.touch(restored_by)

    # Domain events

    @property
    def domain_events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._domain_events)

    def add_event(self, event: DomainEvent) -> None:
        self._domain_events.append(event)

    def pull_events(self) -> list[DomainEvent]:
        """Return pending events and clear the list."""
        events = list(self._domain_events)
        self._domain_events.clear()
        return events

    def clear_events(self) -> None:
        self._domain_events.clear()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

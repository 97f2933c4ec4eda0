"""Conversions between domain types and column values."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import ColumnElement, asc, desc
from sqlalchemy.exc import IntegrityError

from wms.domain.shared import EntityId, SortDirection, ensure_tz_aware


def to_uuid(entity_id: Optional[EntityId]) -> Optional[UUID]:
    return entity_id.as_uuid() if entity_id is not None else None


def to_uuids(entity_ids: Sequence[EntityId]) -> list[UUID]:
    return [entity_id.as_uuid() for entity_id in entity_ids]


def to_entity_id(value: Optional[UUID]) -> Optional[EntityId]:
    return EntityId.from_uuid(value) if value is not None else None


def aware(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite returns naive datetimes for timezone-aware columns."""
    return ensure_tz_aware(value)


def order_by(column: ColumnElement, direction: SortDirection) -> ColumnElement:
    return asc(column) if direction == SortDirection.ASC else desc(column)


def like_pattern(term: str) -> str:
    escaped = term.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def violated_column(error: IntegrityError, candidates: Sequence[str]) -> Optional[str]:
    """Best-effort guess of which unique column an IntegrityError refers to."""
    message = str(error.orig if error.orig is not None else error).lower()
    for column in candidates:
        if column in message:
            return column
    return None

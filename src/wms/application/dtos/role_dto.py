"""DTO for role data."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from wms.domain.role import Role


@dataclass(frozen=True)
class RoleResponseDTO:
    id: str
    name: str
    slug: str
    description: Optional[str]
    is_active: bool
    is_system_role: bool
    hierarchy_level: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, role: Role) -> RoleResponseDTO:
        return cls(
            id=str(role.id),
            name=role.name.value,
            slug=role.slug.value,
            description=role.description,
            is_active=role.is_active,
            is_system_role=role.is_system_role,
            hierarchy_level=role.hierarchy_level,
            created_at=role.created_at,
            updated_at=role.updated_at,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "is_active": self.is_active,
            "is_system_role": self.is_system_role,
            "hierarchy_level": self.hierarchy_level,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

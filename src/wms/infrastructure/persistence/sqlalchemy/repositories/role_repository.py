"""SQLAlchemy implementation of RoleRepository."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wms.domain.role import (
    DEFAULT_ROLE_SLUG,
    Role,
    RoleAlreadyExistsError,
    RoleName,
    RoleRepository,
    RoleSearchCriteria,
    RoleSlug,
    RoleSortOptions,
)
from wms.domain.shared import EntityId, PaginatedResult, PaginationParams, utc_now
from wms.infrastructure.persistence.sqlalchemy.models import RoleModel, user_roles
from wms.infrastructure.persistence.sqlalchemy.repositories._utils import (
    aware,
    like_pattern,
    order_by,
    to_entity_id,
    to_uuid,
    to_uuids,
    violated_column,
)

logger = logging.getLogger(__name__)


class RoleRepositorySQLAlchemy(RoleRepository):
    """SQLAlchemy implementation of the RoleRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, role_id: EntityId) -> Optional[Role]:
        stmt = select(RoleModel).where(
            RoleModel.id == role_id.as_uuid(),
            RoleModel.deleted_at.is_(None),
        )
        return await self._find_one(stmt)

    async def find_by_ids(self, role_ids: Sequence[EntityId]) -> list[Role]:
        if not role_ids:
            return []
        stmt = select(RoleModel).where(
            RoleModel.id.in_(to_uuids(role_ids)),
            RoleModel.deleted_at.is_(None),
        )
        return await self._find_many(stmt)

    async def find_by_name(self, name: RoleName) -> Optional[Role]:
        stmt = select(RoleModel).where(
            func.lower(RoleModel.name) == name.value.lower(),
            RoleModel.deleted_at.is_(None),
        )
        return await self._find_one(stmt)

    async def find_by_slug(self, slug: RoleSlug) -> Optional[Role]:
        stmt = select(RoleModel).where(
            RoleModel.slug == slug.value,
            RoleModel.deleted_at.is_(None),
        )
        return await self._find_one(stmt)

    async def exists_by_name(self, name: RoleName) -> bool:
        stmt = (
            select(RoleModel.id)
            .where(func.lower(RoleModel.name) == name.value.lower())
            .limit(1)
        )
        return (await self._session.scalar(stmt)) is not None

    async def exists_by_slug(self, slug: RoleSlug) -> bool:
        stmt = select(RoleModel.id).where(RoleModel.slug == slug.value).limit(1)
        return (await self._session.scalar(stmt)) is not None

    async def find_with_pagination(
        self,
        criteria: RoleSearchCriteria,
        pagination: PaginationParams,
        sort: Optional[RoleSortOptions] = None,
    ) -> PaginatedResult[Role]:
        sort = sort or RoleSortOptions()
        conditions = [RoleModel.deleted_at.is_(None)]
        if criteria.search:
            pattern = like_pattern(criteria.search)
            conditions.append(
                or_(
                    func.lower(RoleModel.name).like(pattern, escape="\\"),
                    func.lower(RoleModel.slug).like(pattern, escape="\\"),
                    func.lower(RoleModel.description).like(pattern, escape="\\"),
                ),
            )
        if criteria.is_active is not None:
            conditions.append(RoleModel.is_active.is_(criteria.is_active))
        if criteria.is_system_role is not None:
            conditions.append(RoleModel.is_system_role.is_(criteria.is_system_role))
        if criteria.created_after is not None:
            conditions.append(RoleModel.created_at >= aware(criteria.created_after))
        if criteria.created_before is not None:
            conditions.append(RoleModel.created_at <= aware(criteria.created_before))

        total_stmt = select(func.count()).select_from(RoleModel).where(*conditions)
        total = await self._session.scalar(total_stmt) or 0

        stmt = (
            select(RoleModel)
            .where(*conditions)
            .order_by(
                order_by(getattr(RoleModel, sort.field), sort.direction),
                RoleModel.id,
            )
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        roles = await self._find_many(stmt)
        return PaginatedResult.create(roles, total, pagination)

    async def find_active(self) -> list[Role]:
        stmt = (
            select(RoleModel)
            .where(RoleModel.is_active.is_(True), RoleModel.deleted_at.is_(None))
            .order_by(RoleModel.name)
        )
        return await self._find_many(stmt)

    async def find_system_roles(self) -> list[Role]:
        stmt = (
            select(RoleModel)
            .where(RoleModel.is_system_role.is_(True), RoleModel.deleted_at.is_(None))
            .order_by(RoleModel.name)
        )
        return await self._find_many(stmt)

    async def find_default_role(self) -> Optional[Role]:
        return await self.find_by_slug(RoleSlug.from_persistence(DEFAULT_ROLE_SLUG))

    async def find_by_user_id(self, user_id: EntityId) -> list[Role]:
        stmt = (
            select(RoleModel)
            .join(user_roles, user_roles.c.role_id == RoleModel.id)
            .where(
                user_roles.c.user_id == user_id.as_uuid(),
                RoleModel.deleted_at.is_(None),
            )
            .order_by(RoleModel.name)
        )
        return await self._find_many(stmt)

    async def save(self, role: Role) -> Role:
        stmt = select(RoleModel).where(RoleModel.id == role.id.as_uuid())
        existing = (await self._session.execute(stmt)).scalar_one_or_none()

        try:
            if existing:
                self._update_model(existing, role)
                logger.debug("Updated role: %s", role.id)
            else:
                self._session.add(self._map_to_model(role))
                logger.info("Created role: %s (slug: %s)", role.id, role.slug)

            await self._session.flush()
        except IntegrityError as e:
            if violated_column(e, ("slug", "name")) == "slug":
                raise RoleAlreadyExistsError("slug", role.slug.value) from e
            raise RoleAlreadyExistsError("name", role.name.value) from e

        return role

    async def soft_delete(
        self,
        role_ids: Sequence[EntityId],
        deleted_by: Optional[EntityId] = None,
    ) -> int:
        if not role_ids:
            return 0
        now = utc_now()
        stmt = (
            update(RoleModel)
            .where(
                RoleModel.id.in_(to_uuids(role_ids)),
                RoleModel.is_system_role.is_(False),
                RoleModel.deleted_at.is_(None),
            )
            .values(
                deleted_at=now,
                deleted_by=to_uuid(deleted_by),
                updated_at=now,
                updated_by=to_uuid(deleted_by),
            )
        )
        result = await self._session.execute(stmt)
        logger.info("Soft deleted %d role(s)", result.rowcount)
        return result.rowcount

    async def _find_one(self, stmt) -> Optional[Role]:
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._map_to_domain(model)

    async def _find_many(self, stmt) -> list[Role]:
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars()]

    def _map_to_domain(self, model: RoleModel) -> Role:
        return Role.reconstitute(
            entity_id=EntityId.from_uuid(model.id),
            name=RoleName.from_persistence(model.name),
            slug=RoleSlug.from_persistence(model.slug),
            description=model.description,
            is_active=model.is_active,
            is_system_role=model.is_system_role,
            created_at=aware(model.created_at),  # type: ignore[arg-type]
            updated_at=aware(model.updated_at),  # type: ignore[arg-type]
            deleted_at=aware(model.deleted_at),
            created_by=to_entity_id(model.created_by),
            updated_by=to_entity_id(model.updated_by),
            deleted_by=to_entity_id(model.deleted_by),
        )

    def _map_to_model(self, role: Role) -> RoleModel:
        model = RoleModel(
            id=role.id.as_uuid(),
            slug=role.slug.value,
            is_system_role=role.is_system_role,
            created_at=role.created_at,
            created_by=to_uuid(role.created_by),
        )
        self._update_model(model, role)
        return model

    def _update_model(self, model: RoleModel, role: Role) -> None:
        # slug and is_system_role are fixed at creation
        model.name = role.name.value
        model.description = role.description
        model.is_active = role.is_active
        model.deleted_at = role.deleted_at
        model.deleted_by = to_uuid(role.deleted_by)
        model.updated_at = role.updated_at
        model.updated_by = to_uuid(role.updated_by)

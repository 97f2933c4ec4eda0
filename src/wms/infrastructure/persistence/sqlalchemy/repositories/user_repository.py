"""SQLAlchemy implementation of UserRepository."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wms.domain.shared import (
    EntityId,
    PaginatedResult,
    PaginationParams,
    utc_now,
)
from wms.domain.user import (
    Email,
    EmailAlreadyExistsError,
    Password,
    User,
    UsernameAlreadyExistsError,
    UserProfile,
    UserRepository,
    Username,
    UserSearchCriteria,
    UserSortOptions,
)
from wms.infrastructure.persistence.sqlalchemy.models import (
    RoleModel,
    UserModel,
    user_roles,
)
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

_SEARCH_COLUMNS = (
    UserModel.username,
    UserModel.email,
    UserModel.first_name,
    UserModel.last_name,
)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(
        self,
        user_id: EntityId,
        include_deleted: bool = False,
    ) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.id == user_id.as_uuid())
        if not include_deleted:
            stmt = stmt.where(UserModel.deleted_at.is_(None))
        return await self._find_one(stmt)

    async def find_by_username(self, username: Username) -> Optional[User]:
        stmt = select(UserModel).where(
            UserModel.username == username.value,
            UserModel.deleted_at.is_(None),
        )
        return await self._find_one(stmt)

    async def find_by_email(self, email: Email) -> Optional[User]:
        stmt = select(UserModel).where(
            UserModel.email == email.value,
            UserModel.deleted_at.is_(None),
        )
        return await self._find_one(stmt)

    async def find_by_username_or_email(self, identifier: str) -> Optional[User]:
        stmt = select(UserModel).where(
            or_(
                UserModel.username == identifier,
                func.lower(UserModel.email) == identifier.lower(),
            ),
            UserModel.deleted_at.is_(None),
        )
        return await self._find_one(stmt.limit(1))

    async def find_by_reset_token(self, token: str) -> Optional[User]:
        stmt = select(UserModel).where(
            UserModel.reset_token == token,
            UserModel.deleted_at.is_(None),
        )
        return await self._find_one(stmt)

    async def exists_by_username(self, username: Username) -> bool:
        stmt = select(UserModel.id).where(UserModel.username == username.value).limit(1)
        return (await self._session.scalar(stmt)) is not None

    async def exists_by_email(self, email: Email) -> bool:
        stmt = select(UserModel.id).where(UserModel.email == email.value).limit(1)
        return (await self._session.scalar(stmt)) is not None

    async def find_with_pagination(
        self,
        criteria: UserSearchCriteria,
        pagination: PaginationParams,
        sort: Optional[UserSortOptions] = None,
    ) -> PaginatedResult[User]:
        sort = sort or UserSortOptions()
        conditions = self._build_conditions(criteria)

        total_stmt = select(func.count()).select_from(UserModel).where(*conditions)
        total = await self._session.scalar(total_stmt) or 0

        stmt = (
            select(UserModel)
            .where(*conditions)
            .order_by(
                order_by(getattr(UserModel, sort.field), sort.direction),
                UserModel.id,
            )
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        result = await self._session.execute(stmt)
        users = [self._map_to_domain(model) for model in result.scalars()]

        return PaginatedResult.create(users, total, pagination)

    async def find_by_role(self, role_id: EntityId) -> list[User]:
        return await self.find_by_roles([role_id])

    async def find_by_roles(self, role_ids: Sequence[EntityId]) -> list[User]:
        if not role_ids:
            return []
        assigned = select(user_roles.c.user_id).where(
            user_roles.c.role_id.in_(to_uuids(role_ids)),
        )
        stmt = (
            select(UserModel)
            .where(UserModel.id.in_(assigned), UserModel.deleted_at.is_(None))
            .order_by(UserModel.username)
        )
        return await self._find_many(stmt)

    async def find_active(self) -> list[User]:
        stmt = (
            select(UserModel)
            .where(UserModel.is_active.is_(True), UserModel.deleted_at.is_(None))
            .order_by(UserModel.username)
        )
        return await self._find_many(stmt)

    async def count_active(self) -> int:
        stmt = (
            select(func.count())
            .select_from(UserModel)
            .where(UserModel.is_active.is_(True), UserModel.deleted_at.is_(None))
        )
        return await self._session.scalar(stmt) or 0

    async def save(self, user: User) -> User:
        existing = await self._find_model_by_id(user)

        try:
            if existing:
                self._update_model(existing, user)
                logger.debug("Updated user: %s", user.id)
            else:
                self._session.add(self._map_to_model(user))
                logger.info("Created user: %s (username: %s)", user.id, user.username)

            await self._session.flush()
        except IntegrityError as e:
            if violated_column(e, ("username", "email")) == "username":
                raise UsernameAlreadyExistsError(user.username.value) from e
            raise EmailAlreadyExistsError(user.email.value) from e

        return user

    async def soft_delete(
        self,
        user_ids: Sequence[EntityId],
        deleted_by: Optional[EntityId] = None,
    ) -> int:
        if not user_ids:
            return 0
        now = utc_now()
        stmt = (
            update(UserModel)
            .where(UserModel.id.in_(to_uuids(user_ids)), UserModel.deleted_at.is_(None))
            .values(
                deleted_at=now,
                deleted_by=to_uuid(deleted_by),
                updated_at=now,
                updated_by=to_uuid(deleted_by),
            )
        )
        result = await self._session.execute(stmt)
        logger.info("Soft deleted %d user(s)", result.rowcount)
        return result.rowcount

    async def restore(
        self,
        user_ids: Sequence[EntityId],
        restored_by: Optional[EntityId] = None,
    ) -> int:
        if not user_ids:
            return 0
        stmt = (
            update(UserModel)
            .where(
                UserModel.id.in_(to_uuids(user_ids)),
                UserModel.deleted_at.is_not(None),
            )
            .values(
                deleted_at=None,
                deleted_by=None,
                updated_at=utc_now(),
                updated_by=to_uuid(restored_by),
            )
        )
        result = await self._session.execute(stmt)
        logger.info("Restored %d user(s)", result.rowcount)
        return result.rowcount

    async def permanently_delete(self, user_ids: Sequence[EntityId]) -> int:
        if not user_ids:
            return 0
        uuids = to_uuids(user_ids)
        await self._session.execute(
            delete(user_roles).where(user_roles.c.user_id.in_(uuids)),
        )
        result = await self._session.execute(
            delete(UserModel).where(UserModel.id.in_(uuids)),
        )
        logger.info("Permanently deleted %d user(s)", result.rowcount)
        return result.rowcount

    async def assign_roles(
        self,
        user_id: EntityId,
        role_ids: Sequence[EntityId],
    ) -> None:
        uid = user_id.as_uuid()
        await self._session.execute(delete(user_roles).where(user_roles.c.user_id == uid))
        if role_ids:
            now = utc_now()
            await self._session.execute(
                insert(user_roles),
                [
                    {"user_id": uid, "role_id": role_uuid, "assigned_at": now}
                    for role_uuid in dict.fromkeys(to_uuids(role_ids))
                ],
            )
        await self._session.flush()
        logger.debug("Assigned %d role(s) to user %s", len(role_ids), user_id)

    async def get_role_slugs(self, user_id: EntityId) -> list[str]:
        stmt = (
            select(RoleModel.slug)
            .join(user_roles, user_roles.c.role_id == RoleModel.id)
            .where(
                user_roles.c.user_id == user_id.as_uuid(),
                RoleModel.is_active.is_(True),
                RoleModel.deleted_at.is_(None),
            )
            .order_by(RoleModel.slug)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars())

    async def _find_one(self, stmt) -> Optional[User]:
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._map_to_domain(model)

    async def _find_many(self, stmt) -> list[User]:
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars()]

    async def _find_model_by_id(self, user: User) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.id == user.id.as_uuid())
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _build_conditions(criteria: UserSearchCriteria) -> list:
        conditions = []
        if not criteria.include_deleted:
            conditions.append(UserModel.deleted_at.is_(None))
        if criteria.search:
            pattern = like_pattern(criteria.search)
            conditions.append(
                or_(*(func.lower(col).like(pattern, escape="\\") for col in _SEARCH_COLUMNS)),
            )
        if criteria.is_active is not None:
            conditions.append(UserModel.is_active.is_(criteria.is_active))
        if criteria.is_email_verified is not None:
            conditions.append(UserModel.is_email_verified.is_(criteria.is_email_verified))
        if criteria.role_id is not None:
            conditions.append(
                UserModel.id.in_(
                    select(user_roles.c.user_id).where(
                        user_roles.c.role_id == criteria.role_id.as_uuid(),
                    ),
                ),
            )
        if criteria.created_after is not None:
            conditions.append(UserModel.created_at >= aware(criteria.created_after))
        if criteria.created_before is not None:
            conditions.append(UserModel.created_at <= aware(criteria.created_before))
        return conditions

    def _map_to_domain(self, model: UserModel) -> User:
        profile = UserProfile.from_persistence(
            first_name=model.first_name,
            last_name=model.last_name,
            phone=model.phone,
            address=model.address,
            birth_date=model.birth_date,
            gender=model.gender,
            avatar_url=model.avatar_url,
            language=model.language,
            time_zone=model.time_zone,
        )
        return User.reconstitute(
            entity_id=EntityId.from_uuid(model.id),
            username=Username.from_persistence(model.username),
            email=Email.from_persistence(model.email),
            profile=profile,
            password=Password.from_hash(model.password_hash),
            is_active=model.is_active,
            is_email_verified=model.is_email_verified,
            created_at=aware(model.created_at),  # type: ignore[arg-type]
            updated_at=aware(model.updated_at),  # type: ignore[arg-type]
            email_verified_at=aware(model.email_verified_at),
            last_login_at=aware(model.last_login_at),
            reset_token=model.reset_token,
            reset_token_expires_at=aware(model.reset_token_expires_at),
            deleted_at=aware(model.deleted_at),
            created_by=to_entity_id(model.created_by),
            updated_by=to_entity_id(model.updated_by),
            deleted_by=to_entity_id(model.deleted_by),
        )

    def _map_to_model(self, user: User) -> UserModel:
        model = UserModel(
            id=user.id.as_uuid(),
            created_at=user.created_at,
            created_by=to_uuid(user.created_by),
        )
        self._update_model(model, user)
        return model

    def _update_model(self, model: UserModel, user: User) -> None:
        # id, username and email never change after creation
        profile = user.profile
        model.username = user.username.value
        model.email = user.email.value
        model.password_hash = user.password_hash
        model.first_name = profile.first_name
        model.last_name = profile.last_name
        model.phone = profile.phone
        model.address = profile.address
        model.birth_date = profile.birth_date
        model.gender = profile.gender
        model.avatar_url = profile.avatar_url
        model.language = profile.language
        model.time_zone = profile.time_zone
        model.is_active = user.is_active
        model.is_email_verified = user.is_email_verified
        model.email_verified_at = user.email_verified_at
        model.last_login_at = user.last_login_at
        model.reset_token = user.reset_token
        model.reset_token_expires_at = user.reset_token_expires_at
        model.deleted_at = user.deleted_at
        model.deleted_by = to_uuid(user.deleted_by)
        model.updated_at = user.updated_at
        model.updated_by = to_uuid(user.updated_by)

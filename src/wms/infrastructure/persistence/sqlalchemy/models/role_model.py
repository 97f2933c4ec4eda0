"""SQLAlchemy models for roles and user-role assignments."""

from typing import Optional
from uuid import UUID

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from wms.domain.shared.time import utc_now
from wms.infrastructure.persistence.sqlalchemy.models.base import AuditMixin, Base

user_roles = Table(
    "user_roles",
    Base.metadata,
    Column(
        "user_id",
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_id",
        Uuid,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("assigned_at", DateTime(timezone=True), default=utc_now, nullable=False),
)


class RoleModel(Base, AuditMixin):
    """
    SQLAlchemy model for persisting Role aggregates.

    Table: roles
    """

    __tablename__ = "roles"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )
    description: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(default=True)
    is_system_role: Mapped[bool] = mapped_column(default=False)

    def __repr__(self) -> str:
        return f"<RoleModel(id={self.id}, slug={self.slug})>"

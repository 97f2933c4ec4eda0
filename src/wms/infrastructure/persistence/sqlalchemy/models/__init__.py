"""SQLAlchemy models for persistence layer."""

from wms.infrastructure.persistence.sqlalchemy.models.base import (
    AuditMixin,
    Base,
    TimestampMixin,
)
from wms.infrastructure.persistence.sqlalchemy.models.role_model import (
    RoleModel,
    user_roles,
)
from wms.infrastructure.persistence.sqlalchemy.models.user_model import UserModel

__all__ = [
    "AuditMixin",
    "Base",
    "RoleModel",
    "TimestampMixin",
    "UserModel",
    "user_roles",
]

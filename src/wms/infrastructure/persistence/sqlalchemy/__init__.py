"""SQLAlchemy persistence: models, repositories and system role seeding."""

from wms.infrastructure.persistence.sqlalchemy.models import Base
from wms.infrastructure.persistence.sqlalchemy.repositories import (
    RoleRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

__all__ = ["Base", "RoleRepositorySQLAlchemy", "UserRepositorySQLAlchemy"]

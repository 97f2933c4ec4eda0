from wms.infrastructure.persistence.sqlalchemy.repositories.role_repository import (
    RoleRepositorySQLAlchemy,
)
from wms.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)

__all__ = ["RoleRepositorySQLAlchemy", "UserRepositorySQLAlchemy"]

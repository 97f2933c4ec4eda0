"""Role value objects."""

from wms.domain.role.value_objects.role_name import RoleName
from wms.domain.role.value_objects.role_slug import RoleSlug

__all__ = ["RoleName", "RoleSlug"]

from wms.domain.role.aggregates.role import ROLE_HIERARCHY, Role

__all__ = ["ROLE_HIERARCHY", "Role"]

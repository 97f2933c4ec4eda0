"""Data transfer objects for the presentation layer."""

from wms.application.dtos.role_dto import RoleResponseDTO
from wms.application.dtos.user_dto import UserResponseDTO

__all__ = ["RoleResponseDTO", "UserResponseDTO"]

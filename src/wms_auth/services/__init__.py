"""Authentication services."""

from wms_auth.services.jwt_service import JWTService

__all__ = ["JWTService"]

"""WMS Auth - token infrastructure independent of the user domain.

Architecture:
    wms_auth/
    ├── services/      # JWT creation and verification
    ├── schemas.py     # Token data classes
    └── exceptions.py  # Auth exceptions

Password hashing lives with the ``Password`` value object in
``wms.domain.user``.
"""

from wms_auth.exceptions import AuthError, InvalidCredentialsError, InvalidTokenError
from wms_auth.schemas import ACCESS_TOKEN, REFRESH_TOKEN, TokenPair, TokenPayload
from wms_auth.services import JWTService

__all__ = [
    # Services
    "JWTService",
    # Schemas
    "ACCESS_TOKEN",
    "REFRESH_TOKEN",
    "TokenPair",
    "TokenPayload",
    # Exceptions
    "AuthError",
    "InvalidCredentialsError",
    "InvalidTokenError",
]

"""Authentication exceptions.

Raised by ``wms_auth`` and translated to 401 responses by the API layer.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a JWT token is invalid, expired, malformed or of the wrong type."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when the identifier or password is incorrect during login."""

    def __init__(self, message: str = "Invalid username/email or password"):
        super().__init__(message)

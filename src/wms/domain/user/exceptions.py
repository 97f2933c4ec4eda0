"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""

from wms.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """
    Raised when email format is invalid.

    This exception is raised during Email value object creation
    when the provided string doesn't match expected email format.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVALID_EMAIL)


class InvalidUsernameError(ValidationError):
    """Raised when a username violates length, charset or reserved-word rules."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVALID_USERNAME)


class WeakPasswordError(ValidationError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.WEAK_PASSWORD)


class InvalidProfileError(ValidationError):
    """Raised when a user profile field is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVALID_PROFILE)


class UsernameAlreadyExistsError(ConflictError):
    """Username already taken."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(
            "Username already exists",
            code=ErrorCode.USERNAME_ALREADY_EXISTS,
            details={"username": username},
        )


class EmailAlreadyExistsError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "Email already exists",
            code=ErrorCode.EMAIL_ALREADY_EXISTS,
            details={"email": email},
        )


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(
            "User not found",
            code=ErrorCode.USER_NOT_FOUND,
            details={"user_id": str(user_id)},
        )


class InactiveUserError(BusinessRuleViolation):
    """Operation requires an active user."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(
            "User account is inactive",
            code=ErrorCode.INACTIVE_USER,
            details={"user_id": str(user_id)},
        )


class InvalidResetTokenError(ValidationError):
    """Password reset token is unknown, expired or already used."""

    def __init__(self, message: str = "Invalid or expired password reset token") -> None:
        super().__init__(message, code=ErrorCode.INVALID_RESET_TOKEN)

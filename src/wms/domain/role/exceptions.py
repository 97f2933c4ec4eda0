"""Role domain exceptions."""

from wms.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidRoleNameError(ValidationError):
    """Raised when a role name violates length or charset rules."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVALID_ROLE_NAME)


class InvalidRoleSlugError(ValidationError):
    """Raised when a role slug is malformed or reserved."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVALID_ROLE_SLUG)


class RoleNotFoundError(EntityNotFoundError):
    """Role not found."""

    def __init__(self, role_id: str) -> None:
        self.role_id = role_id
        super().__init__(
            "Role not found",
            code=ErrorCode.ROLE_NOT_FOUND,
            details={"role_id": str(role_id)},
        )


class RoleAlreadyExistsError(ConflictError):
    """A role with the same name or slug exists."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(
            f"Role {field} already exists",
            code=ErrorCode.ROLE_ALREADY_EXISTS,
            details={field: value},
        )


class SystemRoleProtectedError(BusinessRuleViolation):
    """System roles cannot be deactivated, modified or deleted."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.SYSTEM_ROLE_PROTECTED)


class InactiveRoleError(BusinessRuleViolation):
    """An inactive role cannot be assigned."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(
            f"Role is inactive: {slug}",
            code=ErrorCode.INACTIVE_ROLE,
            details={"slug": slug},
        )
